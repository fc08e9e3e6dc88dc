"""Normalization helpers shared by the registry, the log and the request schema."""

from __future__ import annotations

from ..constants import DEFAULT_TRACK, TRACKS


def normalize_reg(value: str | None) -> str:
    """Trim and upper-case a registration number (``" fe123 "`` → ``"FE123"``)."""

    return (value or "").strip().upper()


def normalize_track(value) -> str:
    """Return a recognized track, falling back to the default for anything else.

    Unrecognized or missing values are not rejected: they silently become
    ``DEFAULT_TRACK``. Matching is exact, so ``"backend"`` also falls back.
    """

    if isinstance(value, str) and value in TRACKS:
        return value
    return DEFAULT_TRACK
