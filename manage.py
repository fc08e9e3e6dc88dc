from certissue.app import create_app, db
import csv
import os

from flask_migrate import Migrate
from flask.cli import FlaskGroup
import click
from flask import current_app

from certissue.constants import SAMPLE_ATTENDEES
from certissue.services.certificates import get_issuer
from certissue.services.errors import CertificateIssueError
from certissue.services.roster import (
    RosterValidationError,
    read_roster_csv,
    seed_attendees,
)
from certissue.shared.storage import certificate_output_path, write_atomic


migrate = Migrate()


def create_certissue_app():
    app = create_app()
    migrate.init_app(app, db)
    return app


cli = FlaskGroup(create_app=create_certissue_app)


@cli.command("seed_attendees")
@click.option(
    "--csv", "csv_path", type=click.Path(exists=True, dir_okay=False), default=None
)
@click.option(
    "--reset",
    is_flag=True,
    help="Delete existing attendees first (always done for the sample roster)",
)
def seed_attendees_cmd(csv_path: str | None, reset: bool):
    """Load attendees from a CSV (name,reg,track,attended) or the sample roster."""
    if csv_path is None:
        reset = True
    if csv_path:
        with open(csv_path, newline="", encoding="utf-8") as handle:
            try:
                rows = read_roster_csv(handle)
            except RosterValidationError as exc:
                raise click.ClickException(str(exc))
    else:
        rows = SAMPLE_ATTENDEES
    try:
        count = seed_attendees(rows, reset=reset)
    except RosterValidationError as exc:
        db.session.rollback()
        raise click.ClickException(str(exc))
    current_app.logger.info("[SEED] inserted=%s reset=%s", count, reset)
    click.echo(f"Seeded {count} attendees")


@cli.command("gen_cert")
@click.option("--reg", "reg", required=True)
@click.option("--track", "track", default=None)
@click.option("--out", "out_dir", default=".", type=click.Path(file_okay=False))
def gen_cert(reg: str, track: str | None, out_dir: str):
    """Issue a certificate and write the PDF into OUT."""
    try:
        issued = get_issuer().issue_certificate(reg, track)
    except CertificateIssueError as exc:
        raise click.ClickException(exc.public_message)
    path = certificate_output_path(out_dir, issued.filename)
    write_atomic(path, issued.pdf_bytes)
    click.echo(path)


@cli.command("export_issues")
@click.option("--out", "out_path", default=None, type=click.Path(dir_okay=False))
def export_issues(out_path: str | None):
    """Write the issuance log as CSV (stdout by default)."""
    issuance_log = get_issuer().issuance_log
    header = ["IssueId", "IssuedAt", "Name", "Reg", "Track"]

    def _rows():
        for issue in issuance_log.iter_issues():
            yield [
                issue.id,
                issue.issued_at.isoformat() if issue.issued_at else "",
                issue.name,
                issue.reg,
                issue.track,
            ]

    if out_path:
        os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
        with open(out_path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(header)
            total = 0
            for row in _rows():
                writer.writerow(row)
                total += 1
        current_app.logger.info("[EXPORT] issues=%s path=%s", total, out_path)
        click.echo(f"Exported {total} issues to {out_path}")
    else:
        writer = csv.writer(click.get_text_stream("stdout"))
        writer.writerow(header)
        for row in _rows():
            writer.writerow(row)


if __name__ == "__main__":
    cli()
