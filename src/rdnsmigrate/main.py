from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Dict, Optional

import click

from .config import EnvConfig
from .migrator import MigrationError, run_migration
from .utils.logging import configure_logging, redact_sensitive

VERSION = "v0.0.1"

logger = logging.getLogger(__name__)

# Flag name -> environment variable it is exported to.
ENV_FLAGS = {
    "dsn": "DSN",
    "aws_hosted_zone_id": "AWS_HOSTED_ZONE_ID",
    "aws_access_key_id": "AWS_ACCESS_KEY_ID",
    "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
}


def is_root() -> bool:
    return os.getuid() == 0


def export_environment(values: Dict[str, Optional[str]]) -> None:
    for flag, env_name in ENV_FLAGS.items():
        value = values.get(flag)
        if value is not None:
            os.environ[env_name] = value


@click.command(help="Migrate RDNS wildcard records from 0.4.x to 0.5.x.")
@click.version_option(VERSION, "--version", "-v", message="%(version)s")
@click.option("-d", "--debug", is_flag=True, envvar="DEBUG", help="used to set debug mode.")
@click.option("--dsn", envvar="DSN", help="used to set data source name.")
@click.option(
    "--aws_hosted_zone_id",
    envvar="AWS_HOSTED_ZONE_ID",
    help="used to set aws hosted zone ID.",
)
@click.option(
    "--aws_access_key_id",
    envvar="AWS_ACCESS_KEY_ID",
    help="used to set aws access key ID.",
)
@click.option(
    "--aws_secret_access_key",
    envvar="AWS_SECRET_ACCESS_KEY",
    help="used to set aws secret access key.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    dsn: Optional[str],
    aws_hosted_zone_id: Optional[str],
    aws_access_key_id: Optional[str],
    aws_secret_access_key: Optional[str],
) -> None:
    configure_logging(debug)
    if not is_root():
        logger.critical("%s: need to be root", ctx.info_name)
        ctx.exit(1)

    export_environment(
        {
            "dsn": dsn,
            "aws_hosted_zone_id": aws_hosted_zone_id,
            "aws_access_key_id": aws_access_key_id,
            "aws_secret_access_key": aws_secret_access_key,
        }
    )
    try:
        config = EnvConfig(debug=debug)
        logger.debug("Effective configuration: %s", redact_sensitive(asdict(config)))
        run_migration(config)
    except MigrationError as exc:
        if exc.result is not None:
            logger.error("Stopped after %s", exc.result.summary())
        logger.critical("Migration failed: %s", exc)
        ctx.exit(1)
    except Exception as exc:  # noqa: BLE001
        logger.critical("Migration failed: %s: %s", type(exc).__name__, exc, exc_info=True)
        ctx.exit(1)


if __name__ == "__main__":
    cli()
