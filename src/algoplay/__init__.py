"""algoplay: step-traced algorithm demonstrations with interactive playback.

Every demonstration records its full execution as an immutable trace of
snapshots, and a playback session scrubs through that trace forward,
backward, or on autoplay.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
