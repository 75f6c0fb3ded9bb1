"""
Challenge module - the practicality dialogue state machine.
"""

from syllabus_engine.challenge.dialogue import (
    ChallengeTurn,
    start_challenge,
    respond,
    finalize,
)
from syllabus_engine.challenge.service import ChallengeService

__all__ = [
    "ChallengeTurn",
    "start_challenge",
    "respond",
    "finalize",
    "ChallengeService",
]
