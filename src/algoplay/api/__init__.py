"""HTTP surface for algoplay: catalog browsing and remote-controlled playback."""
