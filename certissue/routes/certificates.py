from __future__ import annotations

from io import BytesIO

from flask import Blueprint, current_app, jsonify, request, send_file

from ..constants import MSG_GENERATION_FAILED
from ..services.certificates import get_issuer
from ..services.errors import CertificateIssueError
from ..shared.requests import parse_certificate_request

bp = Blueprint("certificates", __name__, url_prefix="/api")


@bp.post("/cert")
def issue():
    current_app.logger.info("[CERT-API] POST request received")
    payload = request.get_json(silent=True)

    try:
        cert_request = parse_certificate_request(payload)
        current_app.logger.debug(
            "[CERT-API] reg=%s track=%s submitted_name=%s",
            cert_request.reg,
            cert_request.track,
            cert_request.name,
        )
        issued = get_issuer().issue_certificate(cert_request.reg, cert_request.track)
    except CertificateIssueError as exc:
        if exc.status_code >= 500:
            current_app.logger.exception("[CERT-API] generation failed")
        return jsonify({"error": exc.public_message}), exc.status_code
    except Exception:
        current_app.logger.exception("[CERT-API] unexpected error")
        return jsonify({"error": MSG_GENERATION_FAILED}), 500

    # download_name adds an ASCII fallback and a filename* parameter for
    # names outside latin-1.
    resp = send_file(
        BytesIO(issued.pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=issued.filename,
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp
