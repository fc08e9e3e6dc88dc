import os

import pytest

from certissue.services.errors import TemplateUnavailableError
from certissue.shared.templates import TemplateStore


def test_resolve_maps_tracks_to_files(app, template_dir, caplog):
    caplog.set_level("INFO")
    store = TemplateStore(str(template_dir))
    front = store.resolve("Frontend")
    back = store.resolve("Backend")
    assert front.path == os.path.realpath(template_dir / "Front-end.pdf")
    assert back.path == os.path.realpath(template_dir / "Back-end.pdf")
    assert front.size > 0
    assert "[cert-template] using" in caplog.text


def test_load_returns_template_bytes(app, template_dir):
    store = TemplateStore(str(template_dir))
    assert store.load("Backend") == (template_dir / "Back-end.pdf").read_bytes()


def test_unknown_track_is_not_a_template_key(app, template_dir):
    with pytest.raises(ValueError):
        TemplateStore(str(template_dir)).resolve("Fullstack")


def test_missing_template_raises(app, tmp_path):
    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    with pytest.raises(TemplateUnavailableError) as excinfo:
        TemplateStore(str(empty_dir)).load("Frontend")
    assert "track=Frontend" in str(excinfo.value)


def test_empty_template_raises(app, template_dir):
    (template_dir / "Front-end.pdf").write_bytes(b"")
    with pytest.raises(TemplateUnavailableError):
        TemplateStore(str(template_dir)).load("Frontend")


def test_filenames_cannot_escape_directory(app, tmp_path):
    inner = tmp_path / "inner"
    inner.mkdir()
    (tmp_path / "outside.pdf").write_bytes(b"%PDF-1.4")
    store = TemplateStore(str(inner), {"Frontend": "../outside.pdf"})
    with pytest.raises(TemplateUnavailableError):
        store.resolve("Frontend")


def test_shipped_templates_exist():
    assets = os.path.join(
        os.path.dirname(__file__), "..", "certissue", "assets"
    )
    for name in ("Front-end.pdf", "Back-end.pdf"):
        with open(os.path.join(assets, name), "rb") as handle:
            assert handle.read(5) == b"%PDF-"
