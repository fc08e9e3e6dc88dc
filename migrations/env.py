import logging
from logging.config import fileConfig

from alembic import context
from flask import current_app, has_app_context

from certissue.app import create_app, db

config = context.config

fileConfig(config.config_file_name, disable_existing_loggers=False)
logger = logging.getLogger("alembic.env")


def _migration_app():
    # `manage.py db ...` already pushed an app context; plain `alembic` did not.
    if has_app_context():
        return current_app._get_current_object()
    return create_app()


app = _migration_app()
target_metadata = db.metadata


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or app.config[
        "SQLALCHEMY_DATABASE_URI"
    ]


def run_migrations_offline() -> None:
    url = _database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with app.app_context():
        engine = db.engine
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                compare_server_default=True,
                # SQLite cannot ALTER constraints such as ck_attendees_track.
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
        logger.info(
            "[MIGRATE] finished url=%s",
            engine.url.render_as_string(hide_password=True),
        )


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
