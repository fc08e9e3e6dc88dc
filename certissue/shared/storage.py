import os
import tempfile


def write_atomic(path: str, data: bytes) -> None:
    """Write bytes next to ``path`` then rename into place."""
    dir_path = os.path.dirname(path) or "."
    os.makedirs(dir_path, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dir_path, suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def certificate_output_path(out_dir: str, filename: str) -> str:
    """Join ``filename`` under ``out_dir``, refusing anything that escapes it."""
    root = os.path.realpath(out_dir)
    target = os.path.realpath(os.path.join(root, os.path.basename(filename)))
    if not target.startswith(f"{root}{os.sep}"):
        raise ValueError(f"Refusing to write outside {root}: {filename!r}")
    return target
