from __future__ import annotations

import os
from datetime import datetime
from typing import NamedTuple

from flask import current_app

from ..constants import TEMPLATE_FILENAMES
from ..services.errors import TemplateUnavailableError


class TemplateResolution(NamedTuple):
    track: str
    display_name: str
    path: str
    size: int
    mtime: float


def _safe_template_path(templates_dir: str, candidate: str | None) -> str | None:
    raw = (candidate or "").strip()
    if not raw:
        return None
    root = os.path.realpath(templates_dir)
    resolved = os.path.realpath(os.path.join(templates_dir, raw))
    if resolved.startswith(f"{root}{os.sep}"):
        return resolved
    return None


class TemplateStore:
    """Per-track certificate templates kept as files in one directory."""

    def __init__(self, templates_dir: str, filenames: dict[str, str] | None = None):
        self.templates_dir = templates_dir
        self.filenames = dict(filenames or TEMPLATE_FILENAMES)

    def resolve(self, track: str) -> TemplateResolution:
        try:
            filename = self.filenames[track]
        except KeyError:
            raise ValueError(f"Unsupported track: {track!r}") from None

        path = _safe_template_path(self.templates_dir, filename)
        if not path or not os.path.isfile(path):
            available = []
            if os.path.isdir(self.templates_dir):
                available = sorted(
                    name
                    for name in os.listdir(self.templates_dir)
                    if name.lower().endswith(".pdf")
                )[:10]
            raise TemplateUnavailableError(
                "Certificate template not found for track={track} path={path} "
                "available={available}".format(
                    track=track,
                    path=path or filename,
                    available=", ".join(available) if available else "<none>",
                )
            )
        stat = os.stat(path)
        resolution = TemplateResolution(
            track=track,
            display_name=filename,
            path=path,
            size=stat.st_size,
            mtime=stat.st_mtime,
        )
        _log_template_resolution(resolution)
        return resolution

    def load(self, track: str) -> bytes:
        resolution = self.resolve(track)
        try:
            with open(resolution.path, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            raise TemplateUnavailableError(
                f"Certificate template unreadable: {resolution.path}"
            ) from exc
        if not data:
            raise TemplateUnavailableError(
                f"Certificate template is empty: {resolution.path}"
            )
        return data


def _log_template_resolution(resolution: TemplateResolution) -> None:
    timestamp = datetime.fromtimestamp(resolution.mtime).strftime("%Y-%m-%d %H:%M")
    current_app.logger.info(
        "[cert-template] using path=%s track=%s bytes=%s mtime=%s",
        resolution.path,
        resolution.track,
        resolution.size,
        timestamp,
    )
