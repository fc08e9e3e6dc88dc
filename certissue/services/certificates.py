from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from ..shared.certificates import certificate_filename, render_certificate_pdf
from ..shared.normalize import normalize_reg, normalize_track
from ..shared.templates import TemplateStore
from ..shared.time import now_utc
from .attendance import AttendanceRegistry
from .errors import (
    AuditWriteError,
    InvalidPayloadError,
    NoNameOnRecordError,
    NotEligibleError,
)
from .issuance_log import IssuanceLog


@dataclass(frozen=True)
class IssuedCertificate:
    filename: str
    pdf_bytes: bytes
    name: str
    reg: str
    track: str
    issue_id: int | None


class CertificateIssuer:
    """Eligibility gate, audit write and render for a single request.

    Holds no per-request state; one instance serves the whole process.
    """

    def __init__(
        self,
        *,
        registry: AttendanceRegistry,
        issuance_log: IssuanceLog,
        templates: TemplateStore,
        stamp_issue_date: bool = False,
    ):
        self.registry = registry
        self.issuance_log = issuance_log
        self.templates = templates
        self.stamp_issue_date = stamp_issue_date

    def issue_certificate(self, reg: str, track: str | None) -> IssuedCertificate:
        if not isinstance(reg, str) or not reg.strip():
            raise InvalidPayloadError("reg is required.")
        norm_reg = normalize_reg(reg)
        norm_track = normalize_track(track)
        logger = current_app.logger

        self.registry.ensure_available()
        attendee = self.registry.find_attendee(norm_reg, norm_track)
        if attendee is None or not attendee.attended:
            reason = "not_found" if attendee is None else "not_attended"
            logger.info(
                "[cert-gate] blocked generation: reg=%s track=%s reason=%s",
                norm_reg,
                norm_track,
                reason,
            )
            raise NotEligibleError(reason=reason)

        name = (attendee.name or "").strip()
        if not name:
            logger.info(
                "[cert-gate] blocked generation: reg=%s track=%s reason=no_name",
                norm_reg,
                norm_track,
            )
            raise NoNameOnRecordError("No name on record.")

        # The log entry stays even if rendering fails below.
        issue_id = None
        try:
            issue_id = self.issuance_log.append(name, norm_reg, norm_track).id
        except AuditWriteError:
            logger.warning(
                "[CERT-AUDIT] write failed; continuing reg=%s track=%s",
                norm_reg,
                norm_track,
                exc_info=True,
            )

        template_bytes = self.templates.load(norm_track)
        issued_on = now_utc().date() if self.stamp_issue_date else None
        pdf_bytes = render_certificate_pdf(template_bytes, name, norm_reg, issued_on)
        filename = certificate_filename(norm_track, name)

        logger.info(
            "[CERT] issued reg=%s track=%s bytes=%s filename=%s",
            norm_reg,
            norm_track,
            len(pdf_bytes),
            filename,
        )
        return IssuedCertificate(
            filename=filename,
            pdf_bytes=pdf_bytes,
            name=name,
            reg=norm_reg,
            track=norm_track,
            issue_id=issue_id,
        )


def get_issuer() -> CertificateIssuer:
    return current_app.extensions["certificate_issuer"]
