from __future__ import annotations

from typing import Iterator

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..models import CertificateIssue
from ..shared.normalize import normalize_reg
from .errors import AuditWriteError


class IssuanceLog:
    """Append-only audit trail of issued certificates.

    Repeated issuance for the same person adds another row; nothing here
    enforces uniqueness.
    """

    def __init__(self, db):
        self.db = db

    def append(self, name: str, reg: str, track: str) -> CertificateIssue:
        record = CertificateIssue(name=name, reg=normalize_reg(reg), track=track)
        try:
            self.db.session.add(record)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise AuditWriteError(f"Could not record issuance for {reg}.") from exc
        current_app.logger.info(
            "[CERT-AUDIT] recorded id=%s reg=%s track=%s", record.id, record.reg, track
        )
        return record

    def count(self, reg: str | None = None, track: str | None = None) -> int:
        query = self.db.session.query(CertificateIssue)
        if reg is not None:
            query = query.filter(CertificateIssue.reg == normalize_reg(reg))
        if track is not None:
            query = query.filter(CertificateIssue.track == track)
        return query.count()

    def iter_issues(self) -> Iterator[CertificateIssue]:
        yield from (
            self.db.session.query(CertificateIssue)
            .order_by(CertificateIssue.issued_at, CertificateIssue.id)
            .yield_per(500)
        )
