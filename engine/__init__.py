"""
engine/
-------
Playback & session layer.

    from engine import PlaybackController, Session, summarize
"""

from engine.playback import PlaybackController, PlaybackState
from engine.session  import Session
from engine.metrics  import RunMetrics, summarize

__all__ = [
    "PlaybackController",
    "PlaybackState",
    "Session",
    "RunMetrics",
    "summarize",
]
