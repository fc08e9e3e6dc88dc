from __future__ import annotations

from ..constants import (
    MSG_GENERATION_FAILED,
    MSG_INVALID_PAYLOAD,
    MSG_NO_NAME_ON_RECORD,
    MSG_NOT_ELIGIBLE,
)


class CertificateIssueError(RuntimeError):
    """Base class for failures of the certificate issuance workflow."""

    status_code = 500
    public_message = MSG_GENERATION_FAILED


class InvalidPayloadError(CertificateIssueError, ValueError):
    """Raised when the request body or registration number is unusable."""

    status_code = 400
    public_message = MSG_INVALID_PAYLOAD


class NotEligibleError(CertificateIssueError):
    """Raised when no attended record exists for the registration and track."""

    status_code = 404
    public_message = MSG_NOT_ELIGIBLE

    def __init__(self, message: str = MSG_NOT_ELIGIBLE, *, reason: str = "not_found"):
        super().__init__(message)
        self.reason = reason


class NoNameOnRecordError(CertificateIssueError):
    """Raised when the attendance record has a blank name."""

    status_code = 404
    public_message = MSG_NO_NAME_ON_RECORD


class TemplateUnavailableError(CertificateIssueError):
    """Raised when the track's template file cannot be read."""


class RenderFailureError(CertificateIssueError):
    """Raised when the PDF cannot be edited or serialized."""


class StoreUnavailableError(CertificateIssueError):
    """Raised when the backing database cannot be reached."""


class AuditWriteError(CertificateIssueError):
    """Raised when appending to the issuance log fails.

    The workflow logs and swallows this one; it never reaches the caller.
    """
