"""Unit tests for the TuneMatch exception hierarchy."""

from __future__ import annotations

import pytest

from tunematch.utils.errors import (
    ConfigurationError,
    ConflictError,
    ExternalSourceError,
    NotFoundError,
    StoreError,
    TuneMatchError,
    ValidationError,
)

_ALL = [
    ValidationError,
    NotFoundError,
    ConflictError,
    ExternalSourceError,
    StoreError,
    ConfigurationError,
]


@pytest.mark.parametrize("cls", _ALL)
def test_subclasses_share_base(cls) -> None:
    err = cls()
    assert isinstance(err, TuneMatchError)
    assert err.message
    assert err.provider_name is None


@pytest.mark.parametrize(
    ("cls", "retryable"),
    [
        (ValidationError, False),
        (NotFoundError, False),
        (ConflictError, False),
        (ExternalSourceError, True),
        (StoreError, True),
        (ConfigurationError, False),
    ],
)
def test_retryable_flag(cls, retryable: bool) -> None:
    assert cls.retryable is retryable


def test_str_prefixes_provider_name() -> None:
    err = StoreError(message="database is locked", provider_name="sqlite_match_store")
    assert str(err) == "[sqlite_match_store] database is locked"


def test_str_without_provider_is_message() -> None:
    assert str(NotFoundError(message="Match not found")) == "Match not found"


def test_positional_message() -> None:
    err = ExternalSourceError("rate limited")
    assert err.message == "rate limited"
    assert err.args == ("rate limited",)
