# medishare/modules/matching/__init__.py
"""
Matching module - pairs available surplus with open requests

Architecture:
- scorer.py: Pure compatibility score for one surplus/request pair
- finder.py: Enumerates, scores and ranks every compatible pair
- service.py: Loads the store snapshot and shapes the response
- router.py: Matching endpoint
"""

from .router import router
from .scorer import MatchScore, score_match
from .finder import Match, find_matches, filter_for_clinic
from .service import MatchingService

__all__ = [
    "router",
    "MatchScore",
    "score_match",
    "Match",
    "find_matches",
    "filter_for_clinic",
    "MatchingService"
]
