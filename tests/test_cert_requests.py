import pytest

from certissue.services.errors import InvalidPayloadError
from certissue.shared.normalize import normalize_reg, normalize_track
from certissue.shared.requests import CertificateRequest, parse_certificate_request


def test_normalize_reg_trims_and_uppercases():
    assert normalize_reg("  fe123 ") == "FE123"
    assert normalize_reg(normalize_reg("fe123")) == "FE123"
    assert normalize_reg(None) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Frontend", "Frontend"),
        ("Backend", "Backend"),
        ("backend", "Frontend"),
        ("Fullstack", "Frontend"),
        ("", "Frontend"),
        (None, "Frontend"),
        (42, "Frontend"),
    ],
)
def test_normalize_track_defaults_unknown_values(raw, expected):
    assert normalize_track(raw) == expected


def test_parse_request_normalizes_fields():
    parsed = parse_certificate_request(
        {"reg": " be987 ", "track": "Backend", "name": " Someone Else "}
    )
    assert parsed == CertificateRequest(reg="BE987", track="Backend", name="Someone Else")


def test_parse_request_missing_track_defaults():
    parsed = parse_certificate_request({"reg": "fe123"})
    assert parsed.track == "Frontend"
    assert parsed.name is None


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        "reg=FE123",
        {},
        {"reg": ""},
        {"reg": "   "},
        {"reg": 123},
        {"reg": None, "track": "Frontend"},
    ],
)
def test_parse_request_rejects_bad_payloads(payload):
    with pytest.raises(InvalidPayloadError):
        parse_certificate_request(payload)
