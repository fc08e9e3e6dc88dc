import pathlib
import sys

import pytest
from reportlab.pdfgen import canvas

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from certissue.app import create_app, db
from certissue.models import Attendee

PAGE_SIZE = (842, 595)


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "slow" in item.keywords or "quarantine" in item.keywords:
            continue
        item.add_marker("full")
        if "no_smoke" in item.keywords:
            continue
        item.add_marker("smoke")


def make_template_pdf(path, label="Template", pagesize=PAGE_SIZE):
    c = canvas.Canvas(str(path), pagesize=pagesize, invariant=1)
    c.setFont("Helvetica", 18)
    c.drawString(40, pagesize[1] - 60, label)
    c.showPage()
    c.save()
    return path


@pytest.fixture
def template_dir(tmp_path):
    directory = tmp_path / "templates"
    directory.mkdir()
    make_template_pdf(directory / "Front-end.pdf", "Front-end Track")
    make_template_pdf(directory / "Back-end.pdf", "Back-end Track")
    return directory


@pytest.fixture
def app(monkeypatch, template_dir):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("CERT_TEMPLATE_DIR", str(template_dir))
    monkeypatch.delenv("CERT_STAMP_ISSUE_DATE", raising=False)
    application = create_app()
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_attendee(app):
    def _add(name="Nishant Singh", reg="FE123", track="Frontend", attended=True):
        attendee = Attendee(name=name, reg=reg, track=track, attended=attended)
        db.session.add(attendee)
        db.session.commit()
        return attendee

    return _add


@pytest.fixture
def make_template():
    return make_template_pdf
