import pytest

from certissue.app import db
from certissue.models import Attendee, CertificateIssue
from certissue.services.errors import AuditWriteError


def test_attendee_reg_is_normalized_on_save(app, add_attendee):
    attendee = add_attendee(name="  Nishant Singh ", reg=" fe123 ")
    assert attendee.reg == "FE123"
    assert attendee.name == "Nishant Singh"


def test_attendee_rejects_unknown_track(app):
    with pytest.raises(ValueError):
        Attendee(name="Sam", reg="X1", track="Design")


def test_find_attendee_is_case_insensitive(app, add_attendee):
    add_attendee(reg="FE123", track="Frontend")
    registry = app.extensions["certificate_issuer"].registry
    found = registry.find_attendee(" fe123", "Frontend")
    assert found is not None
    assert found.reg == "FE123"
    assert registry.find_attendee("FE123", "Backend") is None


def test_find_attendee_returns_first_of_duplicates(app, add_attendee):
    first = add_attendee(name="First", reg="FE123")
    add_attendee(name="Second", reg="FE123")
    registry = app.extensions["certificate_issuer"].registry
    assert registry.find_attendee("FE123", "Frontend").id == first.id


def test_issuance_log_appends_duplicates(app):
    issuance_log = app.extensions["certificate_issuer"].issuance_log
    issuance_log.append("Jane Doe", "be987", "Backend")
    issuance_log.append("Jane Doe", "BE987", "Backend")
    assert issuance_log.count(reg="be987") == 2
    assert issuance_log.count(track="Frontend") == 0
    assert [i.reg for i in issuance_log.iter_issues()] == ["BE987", "BE987"]


def test_issuance_log_wraps_database_errors(app, monkeypatch):
    from sqlalchemy.exc import IntegrityError

    issuance_log = app.extensions["certificate_issuer"].issuance_log

    def _fail_commit():
        raise IntegrityError("INSERT", {}, Exception("constraint"))

    monkeypatch.setattr(db.session, "commit", _fail_commit)
    with pytest.raises(AuditWriteError):
        issuance_log.append("Jane Doe", "BE987", "Backend")
    monkeypatch.undo()
    assert db.session.query(CertificateIssue).count() == 0

