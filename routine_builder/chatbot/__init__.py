"""
Chat side of the routine builder: relay client, advisor, sessions and views.
"""

from .advisor import RoutineAdvisor
from .relay import RelayClient, RelayResult, RelayStatus, parse_completion
from .session import AdvisorSession
from .state_manager import StateManager
from .transcript import Transcript, TranscriptEntry
from .view import build_view

__all__ = [
    "AdvisorSession",
    "RelayClient",
    "RelayResult",
    "RelayStatus",
    "RoutineAdvisor",
    "StateManager",
    "Transcript",
    "TranscriptEntry",
    "build_view",
    "parse_completion",
]
