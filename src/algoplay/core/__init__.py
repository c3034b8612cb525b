"""Core package for algoplay: trace model, playback engine and settings.

Downstream code usually imports from the sub-packages directly:
    from algoplay.core.trace import Snapshot, Trace
    from algoplay.core.playback import PlaybackSession
"""

from __future__ import annotations

__all__ = ["__doc__"]
