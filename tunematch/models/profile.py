"""Listening-profile domain models.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph -- no imports from upper layers).
#
# A user's listening profile arrives from the profile source as an ordered
# list of artists.  The ORDER is the ranking: index 0 is the most-played
# artist.  Nothing downstream re-sorts a RankedProfile; the scorer reads
# rank straight from the tuple position.
#
# All models are frozen so a profile handed to the scorer is an immutable
# snapshot, safe to share between concurrent scoring calls.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ArtistAffinity(BaseModel):
    """One artist's weight inputs inside a user's listening profile."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Artist name; unique key within a profile.")
    external_id: str | None = Field(
        default=None,
        description="Provider-side identifier (e.g. MusicBrainz id), if known.",
    )
    play_count: int = Field(default=0, ge=0, description="How often the user played this artist.")
    listener_count: int = Field(
        default=0,
        ge=0,
        description="Global listener count; low values mark niche artists.",
    )

    @field_validator("external_id")
    @classmethod
    def _blank_id_is_none(cls, value: str | None) -> str | None:
        # Providers report unknown ids as an empty string.
        if value is not None and not value.strip():
            return None
        return value


class RankedProfile(BaseModel):
    """An ordered snapshot of one user's top artists (index 0 = most played)."""

    model_config = ConfigDict(frozen=True)

    user_id: str | None = Field(default=None, description="Owner of the profile, when known.")
    artists: tuple[ArtistAffinity, ...] = Field(default=())

    @classmethod
    def of(cls, *artists: ArtistAffinity, user_id: str | None = None) -> RankedProfile:
        return cls(user_id=user_id, artists=artists)

    @property
    def is_empty(self) -> bool:
        return not self.artists

    def names(self) -> list[str]:
        """Artist names in rank order."""
        return [a.name for a in self.artists]

    def top(self, n: int) -> RankedProfile:
        """Return a profile holding only the first *n* artists."""
        return self.model_copy(update={"artists": self.artists[:n]})


class CompatibilityResult(BaseModel):
    """Output of the compatibility scorer for one pair of profiles."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=99.0, description="Bounded similarity score.")
    common_artists: frozenset[str] = Field(
        default_factory=frozenset,
        description="Artist names present in both profiles (possibly truncated).",
    )

    @classmethod
    def empty(cls) -> CompatibilityResult:
        return cls(score=0.0, common_artists=frozenset())
