from __future__ import annotations

import re
from datetime import date
from io import BytesIO
from typing import NamedTuple

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.generic import ContentStream, DictionaryObject, NameObject
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..constants import REGISTRATION_LABEL
from ..services.errors import RenderFailureError
from .time import fmt_issue_date

# Positions are measured from the top-left of the template page in points.
NAME_FONT = "Helvetica-Bold"
NAME_FONT_SIZE_PT = 32
NAME_X_PT = 200
NAME_FROM_TOP_PT = 280

REG_FONT = "Helvetica"
REG_FONT_SIZE_PT = 14
REG_X_PT = 450
REG_FROM_TOP_PT = 280

FOOTER_FONT = "Helvetica"
FOOTER_FONT_SIZE_PT = 10
FOOTER_FROM_BOTTOM_PT = 40

# Overlay fonts are renamed under this prefix so they never collide with the
# template's own font resources when the pages are merged.
OVERLAY_FONT_PREFIX = "CertOverlay"

_WHITESPACE_RE = re.compile(r"\s+")


class OverlayLine(NamedTuple):
    text: str
    font: str
    size: float
    x: float
    y: float


def y_from_top(page_height: float, distance_from_top: float) -> float:
    """Convert a top-origin offset to PDF's bottom-origin y coordinate."""
    return page_height - distance_from_top


def registration_line(reg: str) -> str:
    return f"{REGISTRATION_LABEL} {reg}"


def certificate_filename(track: str, name: str) -> str:
    safe_name = _WHITESPACE_RE.sub("_", name)
    return f"Certificate-{track}-{safe_name}.pdf"


def overlay_layout(
    width: float,
    height: float,
    name: str,
    reg: str,
    issued_on: date | None = None,
) -> list[OverlayLine]:
    """Return the text lines drawn over the template, in drawing order.

    No wrapping or truncation happens here; a long name simply runs past the
    template's printable area.
    """

    lines = [
        OverlayLine(
            name,
            NAME_FONT,
            NAME_FONT_SIZE_PT,
            NAME_X_PT,
            y_from_top(height, NAME_FROM_TOP_PT),
        ),
        OverlayLine(
            registration_line(reg),
            REG_FONT,
            REG_FONT_SIZE_PT,
            REG_X_PT,
            y_from_top(height, REG_FROM_TOP_PT),
        ),
    ]
    if issued_on is not None:
        footer = f"Issued on {fmt_issue_date(issued_on)}"
        footer_width = stringWidth(footer, FOOTER_FONT, FOOTER_FONT_SIZE_PT)
        lines.append(
            OverlayLine(
                footer,
                FOOTER_FONT,
                FOOTER_FONT_SIZE_PT,
                (width - footer_width) / 2.0,
                FOOTER_FROM_BOTTOM_PT,
            )
        )
    return lines


def _build_overlay(width: float, height: float, lines: list[OverlayLine]):
    buffer = BytesIO()
    # invariant=1 drops reportlab's timestamps and random document id.
    c = canvas.Canvas(buffer, pagesize=(width, height), invariant=1)
    for line in lines:
        c.setFont(line.font, line.size)
        c.drawString(line.x, line.y, line.text)
    c.save()
    buffer.seek(0)
    return _rename_overlay_fonts(PdfReader(buffer).pages[0])


def _rename_overlay_fonts(page):
    """Rename the page's font resources to ``/CertOverlay<name>``.

    Templates drawn with reportlab also call their first font ``/F1``. When
    two merged pages share a resource name with different values, PyPDF2
    renames one of them with a random suffix, which would make the output
    differ between runs.
    """

    resources = page["/Resources"]
    fonts = resources.get("/Font")
    if fonts is None:
        return page
    fonts = fonts.get_object()

    rename = {
        key: NameObject(f"/{OVERLAY_FONT_PREFIX}{key[1:]}") for key in fonts.keys()
    }
    renamed = DictionaryObject()
    for key, new_key in rename.items():
        renamed[new_key] = fonts.raw_get(key)
    resources[NameObject("/Font")] = renamed

    content = ContentStream(page.get_contents(), page.pdf)
    for operands, operator in content.operations:
        if operator == b"Tf" and operands and operands[0] in rename:
            operands[0] = rename[operands[0]]
    page[NameObject("/Contents")] = content
    return page


def render_certificate_pdf(
    template_bytes: bytes,
    name: str,
    reg: str,
    issued_on: date | None = None,
) -> bytes:
    """Overlay ``name`` and the registration line onto the first template page.

    The template bytes are never modified; the result is returned, not stored.
    """

    try:
        base_reader = PdfReader(BytesIO(template_bytes))
        if not base_reader.pages:
            raise ValueError("template has no pages")
        base_page = base_reader.pages[0]
        w = float(base_page.mediabox.width)
        h = float(base_page.mediabox.height)

        overlay_page = _build_overlay(w, h, overlay_layout(w, h, name, reg, issued_on))
        base_page.merge_page(overlay_page)

        writer = PdfWriter()
        writer.add_page(base_page)
        out_buf = BytesIO()
        writer.write(out_buf)
    except Exception as exc:
        raise RenderFailureError(f"Could not render certificate: {exc}") from exc
    return out_buf.getvalue()
