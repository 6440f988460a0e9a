"""TuneMatch domain models -- re-exports all public model classes.

    - profile.py -- Ranked listening profiles and scorer output
    - match.py   -- Likes, matches, discover-feed entries
"""

from __future__ import annotations

from tunematch.models.match import DiscoverProfile, Like, Match, canonical_pair
from tunematch.models.profile import ArtistAffinity, CompatibilityResult, RankedProfile

__all__ = [
    "ArtistAffinity",
    "CompatibilityResult",
    "DiscoverProfile",
    "Like",
    "Match",
    "RankedProfile",
    "canonical_pair",
]
