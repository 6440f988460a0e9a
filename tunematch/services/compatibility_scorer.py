"""Musical compatibility scoring -- cosine similarity over weighted artist vectors.

# ─── HOW THE SCORE IS BUILT ──────────────────────────────────────────
#
#   1. Every distinct artist name across both profiles gets one coordinate.
#   2. Each profile becomes a vector over those coordinates.  An artist at
#      rank i contributes
#
#          position_weight * play_weight * popularity_weight
#
#      position_weight   = 1 - i/50              (rank 0 -> 1.0, rank 49 -> 0.02)
#      play_weight       = max(ln(plays), 1)     (1.0 when plays == 0)
#      popularity_weight = 1 / max(log10(listeners), 1)   (1.0 when listeners == 0)
#
#      Niche artists (few listeners) weigh more than mainstream ones, so a
#      shared obscure artist moves the score further than a shared hit act.
#      Artists missing from a profile weigh 0 in that profile's vector.
#   3. Both vectors are L2-normalized and their dot product taken.
#   4. The similarity in [-1, 1] maps linearly onto [0, 99].  Identical
#      taste scores 99, never 100.
#
# Everything here is a pure function of its arguments, so one scorer
# instance can be shared across tasks and threads.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from tunematch.models.profile import ArtistAffinity, CompatibilityResult, RankedProfile

MAX_RANKED_ARTISTS = 50
MAX_SCORE = 99.0

# Rounding absorbs float drift so identical profiles land on exactly MAX_SCORE.
_SCORE_PRECISION = 9


def affinity_weight(
    rank: int,
    artist: ArtistAffinity,
    max_ranked_artists: int = MAX_RANKED_ARTISTS,
) -> float:
    """Return the composite weight of *artist* at 0-based *rank*."""
    position_weight = 1.0 - rank / max_ranked_artists

    if artist.play_count > 0:
        play_weight = max(math.log(artist.play_count), 1.0)
    else:
        play_weight = 1.0

    if artist.listener_count > 0:
        popularity_weight = 1.0 / max(math.log10(artist.listener_count), 1.0)
    else:
        popularity_weight = 1.0

    return position_weight * play_weight * popularity_weight


def build_artist_index(*profiles: RankedProfile) -> dict[str, int]:
    """Assign each distinct artist name a coordinate, in first-seen order."""
    index: dict[str, int] = {}
    for profile in profiles:
        for artist in profile.artists:
            if artist.name not in index:
                index[artist.name] = len(index)
    return index


def build_weight_vector(
    profile: RankedProfile,
    index: dict[str, int],
    max_ranked_artists: int = MAX_RANKED_ARTISTS,
) -> list[float]:
    """Project *profile* onto the coordinate system defined by *index*."""
    vector = [0.0] * len(index)
    seen: set[str] = set()
    for rank, artist in enumerate(profile.artists[:max_ranked_artists]):
        # A repeated name keeps its highest-ranked occurrence.
        if artist.name in seen:
            continue
        seen.add(artist.name)
        vector[index[artist.name]] = affinity_weight(rank, artist, max_ranked_artists)
    return vector


def l2_normalize(vector: list[float]) -> list[float] | None:
    """Scale *vector* to unit length; ``None`` when its norm is zero."""
    norm = math.sqrt(math.fsum(x * x for x in vector))
    if norm == 0.0:
        return None
    return [x / norm for x in vector]


def cosine_similarity(vector_a: list[float], vector_b: list[float]) -> float | None:
    """Cosine similarity of two equal-length vectors, clamped to [-1, 1].

    Returns ``None`` if either vector has zero norm.
    """
    unit_a = l2_normalize(vector_a)
    unit_b = l2_normalize(vector_b)
    if unit_a is None or unit_b is None:
        return None
    dot = math.fsum(a * b for a, b in zip(unit_a, unit_b, strict=True))
    return max(-1.0, min(1.0, dot))


def similarity_to_score(similarity: float, max_score: float = MAX_SCORE) -> float:
    """Map a similarity in [-1, 1] onto [0, max_score]."""
    score = (similarity + 1.0) / 2.0 * max_score
    return round(max(0.0, min(max_score, score)), _SCORE_PRECISION)


def common_artists(
    profile_a: RankedProfile,
    profile_b: RankedProfile,
    limit: int | None = None,
) -> frozenset[str]:
    """Artist names present in both profiles.

    With a *limit*, keeps the names with the smallest combined rank (ties
    broken by name) so the selection is deterministic and does not depend
    on argument order.
    """
    ranks_a = _first_ranks(profile_a.artists)
    ranks_b = _first_ranks(profile_b.artists)
    shared = ranks_a.keys() & ranks_b.keys()
    if limit is None or len(shared) <= limit:
        return frozenset(shared)
    ordered = sorted(shared, key=lambda name: (ranks_a[name] + ranks_b[name], name))
    return frozenset(ordered[:max(limit, 0)])


def _first_ranks(artists: Iterable[ArtistAffinity]) -> dict[str, int]:
    ranks: dict[str, int] = {}
    for rank, artist in enumerate(artists):
        ranks.setdefault(artist.name, rank)
    return ranks


class CompatibilityScorer:
    """Scores two ranked profiles against each other.

    Parameters
    ----------
    max_ranked_artists:
        How many leading entries of each profile contribute weight; also the
        span of the linear position decay.
    max_score:
        Score assigned to identical profiles.
    """

    def __init__(
        self,
        max_ranked_artists: int = MAX_RANKED_ARTISTS,
        max_score: float = MAX_SCORE,
    ) -> None:
        self._max_ranked_artists = max_ranked_artists
        self._max_score = max_score

    @property
    def max_ranked_artists(self) -> int:
        return self._max_ranked_artists

    def score(
        self,
        profile_a: RankedProfile,
        profile_b: RankedProfile,
        common_limit: int | None = None,
    ) -> CompatibilityResult:
        """Score *profile_a* against *profile_b*.

        Never raises for degenerate input: an empty profile on either side,
        or a profile whose vector has zero norm, scores 0.0.
        """
        if profile_a.is_empty or profile_b.is_empty:
            return CompatibilityResult.empty()

        truncated_a = profile_a.top(self._max_ranked_artists)
        truncated_b = profile_b.top(self._max_ranked_artists)
        index = build_artist_index(truncated_a, truncated_b)
        vector_a = build_weight_vector(truncated_a, index, self._max_ranked_artists)
        vector_b = build_weight_vector(truncated_b, index, self._max_ranked_artists)

        similarity = cosine_similarity(vector_a, vector_b)
        if similarity is None:
            score = 0.0
        else:
            score = similarity_to_score(similarity, self._max_score)

        return CompatibilityResult(
            score=score,
            common_artists=common_artists(profile_a, profile_b, common_limit),
        )
