"""
state/ - Async load lifecycle and loading aggregation
"""

from .load_state import (
    LoadStatus,
    LoadState,
    LoadStateMachine,
)

from .loading import LoadingTracker

__all__ = [
    "LoadStatus",
    "LoadState",
    "LoadStateMachine",
    "LoadingTracker",
]
