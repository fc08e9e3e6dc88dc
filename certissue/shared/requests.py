from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..services.errors import InvalidPayloadError
from .normalize import normalize_reg, normalize_track


@dataclass(frozen=True)
class CertificateRequest:
    reg: str
    track: str
    # Accepted for the form's benefit only; the printed name comes from the registry.
    name: str | None = None


def parse_certificate_request(payload: Any) -> CertificateRequest:
    """Validate a decoded JSON body into a :class:`CertificateRequest`.

    ``reg`` must be a non-blank string. ``track`` is lenient: anything other
    than a recognized track, including a missing value, becomes the default.
    """

    if not isinstance(payload, dict):
        raise InvalidPayloadError("Request body must be a JSON object.")

    reg_raw = payload.get("reg")
    if not isinstance(reg_raw, str) or not reg_raw.strip():
        raise InvalidPayloadError("reg is required.")

    name_raw = payload.get("name")
    name = name_raw.strip() if isinstance(name_raw, str) and name_raw.strip() else None

    return CertificateRequest(
        reg=normalize_reg(reg_raw),
        track=normalize_track(payload.get("track")),
        name=name,
    )
