from __future__ import annotations

from sqlalchemy.orm import validates

from .app import db
from .constants import TRACKS
from .shared.normalize import normalize_reg
from .shared.time import now_utc


class Attendee(db.Model):
    __tablename__ = "attendees"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    reg = db.Column(db.String(64), nullable=False)
    track = db.Column(db.String(16), nullable=False)
    attended = db.Column(
        db.Boolean, nullable=False, default=True, server_default=db.true()
    )
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime, server_default=db.func.now(), onupdate=db.func.now()
    )
    __table_args__ = (
        # Not unique: the registry tolerates duplicate rows per (reg, track).
        db.Index("ix_attendees_reg_track", "reg", "track"),
        db.CheckConstraint(
            "track IN ('Frontend', 'Backend')", name="ck_attendees_track"
        ),
    )

    @validates("reg")
    def _normalize_reg(self, key, value):
        return normalize_reg(value)

    @validates("name")
    def _strip_name(self, key, value):
        return (value or "").strip()

    @validates("track")
    def _check_track(self, key, value):
        if value not in TRACKS:
            raise ValueError(f"Unsupported track: {value!r}")
        return value

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"<Attendee {self.reg}/{self.track} attended={self.attended}>"


class CertificateIssue(db.Model):
    __tablename__ = "certificate_issues"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    reg = db.Column(db.String(64), nullable=False)
    track = db.Column(db.String(16), nullable=False)
    issued_at = db.Column(db.DateTime(timezone=True), nullable=False, default=now_utc)
    __table_args__ = (db.Index("ix_certificate_issues_reg", "reg"),)
