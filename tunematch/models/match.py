"""Like and Match domain models.

A Like is one user's one-directional interest in another.  A Match is the
reciprocal state: both users liked each other.  Matches are stored under a
canonical pair -- ``user_a`` is always the lexicographically smaller id --
so a lookup by either participant hits the same row.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def canonical_pair(user_x: str, user_y: str) -> tuple[str, str]:
    """Order two user ids lexicographically."""
    if user_x <= user_y:
        return user_x, user_y
    return user_y, user_x


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    """A single directed like from ``from_user`` to ``to_user``."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    from_user: str = Field(min_length=1)
    to_user: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=_utcnow)


class Match(BaseModel):
    """A confirmed reciprocal like between two users."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_a: str = Field(min_length=1, description="Lexicographically smaller participant id.")
    user_b: str = Field(min_length=1, description="Lexicographically larger participant id.")
    compatibility_score: float | None = Field(default=None, ge=0.0, le=99.0)
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _check_canonical_order(self) -> Match:
        if not self.user_a < self.user_b:
            msg = f"user_a must sort before user_b, got {self.user_a!r} and {self.user_b!r}"
            raise ValueError(msg)
        return self

    @classmethod
    def create(
        cls,
        user_x: str,
        user_y: str,
        compatibility_score: float | None = None,
    ) -> Match:
        """Build a Match for an unordered pair, canonicalizing participant order."""
        user_a, user_b = canonical_pair(user_x, user_y)
        return cls(user_a=user_a, user_b=user_b, compatibility_score=compatibility_score)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.user_a, self.user_b)

    def other_participant(self, user_id: str) -> str:
        """Return the participant that is not *user_id*."""
        if user_id == self.user_a:
            return self.user_b
        if user_id == self.user_b:
            return self.user_a
        msg = f"{user_id!r} is not part of match {self.id}"
        raise ValueError(msg)


class DiscoverProfile(BaseModel):
    """A ranked candidate in a user's discover feed."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    compatibility_score: float = Field(ge=0.0, le=99.0)
    top_artists: list[str] = Field(default_factory=list)
    common_artists: list[str] = Field(default_factory=list)
