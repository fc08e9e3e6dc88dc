import os

from certissue.shared.storage import certificate_output_path, write_atomic


def test_output_path_stays_inside_out_dir(tmp_path):
    target = certificate_output_path(str(tmp_path / "out"), "../Certificate-x.pdf")
    assert os.path.dirname(target) == os.path.realpath(tmp_path / "out")
    assert os.path.basename(target) == "Certificate-x.pdf"


def test_write_atomic_replaces_and_leaves_no_partials(tmp_path):
    target = certificate_output_path(str(tmp_path / "out"), "Certificate-x.pdf")
    write_atomic(target, b"%PDF-1.4 first")
    write_atomic(target, b"%PDF-1.4")
    with open(target, "rb") as handle:
        assert handle.read() == b"%PDF-1.4"
    assert os.listdir(os.path.dirname(target)) == ["Certificate-x.pdf"]
