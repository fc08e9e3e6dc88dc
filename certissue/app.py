import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .models import Attendee, CertificateIssue  # noqa: E402,F401


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def create_app():
    app = Flask(__name__)
    app.secret_key = os.getenv("SECRET_KEY", "dev")

    DB_USER = os.getenv("DB_USER", "certissue")
    DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
    DB_HOST = os.getenv("DB_HOST", "db")
    DB_NAME = os.getenv("DB_NAME", "certissue")
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}/{DB_NAME}",
    )

    app.config["SQLALCHEMY_DATABASE_URI"] = DATABASE_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024
    app.config["CERT_TEMPLATE_DIR"] = os.getenv(
        "CERT_TEMPLATE_DIR", os.path.join(app.root_path, "assets")
    )
    app.config["CERT_STAMP_ISSUE_DATE"] = _env_flag("CERT_STAMP_ISSUE_DATE")

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))

    db.init_app(app)

    from .services.attendance import AttendanceRegistry
    from .services.certificates import CertificateIssuer
    from .services.issuance_log import IssuanceLog
    from .shared.templates import TemplateStore

    # Built once per process; routes look it up by reference.
    app.extensions["certificate_issuer"] = CertificateIssuer(
        registry=AttendanceRegistry(db),
        issuance_log=IssuanceLog(db),
        templates=TemplateStore(app.config["CERT_TEMPLATE_DIR"]),
        stamp_issue_date=app.config["CERT_STAMP_ISSUE_DATE"],
    )

    @app.get("/health")
    def health():  # pragma: no cover - simple healthcheck
        return "OK", 200

    from .routes.certificates import bp as certificates_bp

    app.register_blueprint(certificates_bp)

    return app
