"""Business logic: scoring, like -> match coordination, discover feed."""

from tunematch.services.compatibility_scorer import CompatibilityScorer
from tunematch.services.compatibility_service import CompatibilityService
from tunematch.services.discover_service import DiscoverService
from tunematch.services.match_coordinator import MatchCoordinator

__all__ = [
    "CompatibilityScorer",
    "CompatibilityService",
    "DiscoverService",
    "MatchCoordinator",
]
