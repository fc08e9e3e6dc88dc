from __future__ import annotations

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from ..models import Attendee
from ..shared.normalize import normalize_reg, normalize_track
from .errors import StoreUnavailableError


class AttendanceRegistry:
    """Read-only view over the ``attendees`` table."""

    def __init__(self, db):
        self.db = db

    def ensure_available(self) -> None:
        """Acquire a connection before any lookup; raise if the store is down."""

        try:
            self.db.session.execute(text("SELECT 1"))
        except DBAPIError as exc:
            self.db.session.rollback()
            current_app.logger.error("[cert-store] unavailable: %s", exc)
            raise StoreUnavailableError("Attendance store is unavailable.") from exc

    def find_attendee(self, reg: str, track: str) -> Attendee | None:
        """Return the attendance record for the normalized (reg, track) pair."""

        norm_reg = normalize_reg(reg)
        norm_track = normalize_track(track)
        try:
            return (
                self.db.session.query(Attendee)
                .filter(Attendee.reg == norm_reg, Attendee.track == norm_track)
                .order_by(Attendee.id)
                .first()
            )
        except DBAPIError as exc:
            self.db.session.rollback()
            raise StoreUnavailableError("Attendance lookup failed.") from exc
