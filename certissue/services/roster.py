from __future__ import annotations

import csv
from typing import Iterable, TextIO

from ..app import db
from ..constants import TRACKS
from ..models import Attendee
from ..shared.normalize import normalize_reg

_TRUE_VALUES = {"1", "true", "yes", "y", "x"}
_FALSE_VALUES = {"0", "false", "no", "n"}


class RosterValidationError(ValueError):
    """Raised when a roster row cannot be turned into an attendee."""


def _parse_attended(value) -> bool:
    if isinstance(value, bool):
        return value
    lowered = "" if value is None else str(value).strip().lower()
    if not lowered:
        return True
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise RosterValidationError(f"attended must be true or false, got {value!r}")


def read_roster_csv(handle: TextIO) -> list[dict]:
    """Read ``name,reg,track[,attended]`` rows; a missing attended column means true."""

    reader = csv.DictReader(handle)
    missing = {"name", "reg", "track"} - set(reader.fieldnames or [])
    if missing:
        raise RosterValidationError(
            f"Roster is missing columns: {', '.join(sorted(missing))}"
        )
    rows = []
    for line_no, row in enumerate(reader, start=2):
        try:
            attended = _parse_attended(row.get("attended", True))
        except RosterValidationError as exc:
            raise RosterValidationError(f"line {line_no}: {exc}") from None
        rows.append(
            {
                "name": row.get("name") or "",
                "reg": row.get("reg") or "",
                "track": (row.get("track") or "").strip(),
                "attended": attended,
            }
        )
    return rows


def seed_attendees(rows: Iterable[dict], *, reset: bool = False) -> int:
    """Insert attendee rows and commit; returns the number inserted.

    Tracks must match exactly; unlike the issuance request, the seeder does
    not fall back to a default track.
    """

    attendees = []
    for row in rows:
        reg = normalize_reg(row.get("reg"))
        track = row.get("track")
        if not reg:
            raise RosterValidationError(f"Missing reg for {row.get('name')!r}")
        if track not in TRACKS:
            raise RosterValidationError(f"Unsupported track {track!r} for {reg}")
        attendees.append(
            Attendee(
                name=row.get("name") or "",
                reg=reg,
                track=track,
                attended=_parse_attended(row.get("attended", True)),
            )
        )

    if reset:
        db.session.query(Attendee).delete()
    db.session.add_all(attendees)
    db.session.commit()
    return len(attendees)
