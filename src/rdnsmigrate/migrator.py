from __future__ import annotations

import logging
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from .clients.route53 import Route53Client, short_zone_id
from .config import EnvConfig
from .database import create_db_engine, session_scope
from .models import MigrationResult, RecordA
from .utils.dns import (
    ESCAPED_WILDCARD_PREFIX,
    bare_name,
    matches_wildcard_of,
    rename_record_set,
)

logger = logging.getLogger(__name__)

PROVIDER_ERRORS = (BotoCoreError, ClientError)


class MigrationError(Exception):
    """A migration step failed. The run stops at the first one.

    ``result`` carries the counters reached before the failure; rows
    inserted up to that point stay committed.
    """

    def __init__(self, message: str, result: Optional[MigrationResult] = None):
        super().__init__(message)
        self.result = result


class Migrator:
    def __init__(self, session: Session, route53: Route53Client, zone_id: str):
        self.session = session
        self.route53 = route53
        self.zone_id = zone_id

    def run(self) -> MigrationResult:
        result = MigrationResult()
        records = self.wildcard_records()
        logger.info("Found %s escaped wildcard records", len(records))
        try:
            for record in records:
                result.scanned += 1
                self.migrate_record(record, result)
        except MigrationError as exc:
            exc.result = result
            raise
        return result

    def wildcard_records(self) -> List[RecordA]:
        stmt = select(RecordA).where(
            col(RecordA.fqdn).startswith(ESCAPED_WILDCARD_PREFIX, autoescape=True)
        ).order_by(col(RecordA.id))
        try:
            return list(self.session.exec(stmt).all())
        except SQLAlchemyError as exc:
            raise MigrationError(f"querying wildcard records: {exc}") from exc

    def migrate_record(self, record: RecordA, result: MigrationResult) -> None:
        name = bare_name(record.fqdn)
        found = self._find_existing(name)
        # An empty stored name counts as missing.
        if found:
            logger.info("Skipping %s: %s already exists", record.fqdn, name)
            result.skipped += 1
            return

        self._insert(record, name)
        result.inserted += 1
        result.inserted_names.append(name)
        result.upserted += self._mirror_to_route53(record.fqdn, name)

    def _find_existing(self, name: str) -> Optional[str]:
        stmt = select(RecordA.fqdn).where(RecordA.fqdn == name)
        try:
            return self.session.exec(stmt).first()
        except SQLAlchemyError as exc:
            raise MigrationError(f"looking up record {name!r}: {exc}") from exc

    def _insert(self, source: RecordA, name: str) -> RecordA:
        row = RecordA(
            fqdn=name,
            type=source.type,
            content=source.content,
            created_on=source.created_on,
            tid=source.tid,
        )
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise MigrationError(f"inserting record {name!r}: {exc}") from exc
        logger.info("Inserted record %s content=%s tid=%s", name, row.content, row.tid)
        return row

    def _mirror_to_route53(self, wildcard_fqdn: str, name: str) -> int:
        try:
            record_sets = self.route53.list_record_sets(self.zone_id, wildcard_fqdn, "A")
        except PROVIDER_ERRORS as exc:
            raise MigrationError(f"listing record sets from {wildcard_fqdn!r}: {exc}") from exc

        upserted = 0
        for record_set in record_sets:
            if not matches_wildcard_of(record_set.get("Name", ""), name):
                continue
            try:
                self.route53.upsert_record_set(self.zone_id, rename_record_set(record_set, name))
            except PROVIDER_ERRORS as exc:
                raise MigrationError(f"upserting record set {name!r}: {exc}") from exc
            upserted += 1
        if not upserted:
            logger.debug("No Route 53 record sets matched %s", wildcard_fqdn)
        return upserted


def run_migration(
    config: EnvConfig, route53: Optional[Route53Client] = None
) -> MigrationResult:
    try:
        config.validate()
    except ValueError as exc:
        raise MigrationError(str(exc)) from exc

    if route53 is None:
        route53 = Route53Client(
            access_key_id=config.aws_access_key_id,
            secret_access_key=config.aws_secret_access_key,
            region_name=config.aws_region,
        )

    try:
        zone = route53.get_hosted_zone(config.aws_hosted_zone_id or "")
    except PROVIDER_ERRORS as exc:
        raise MigrationError(
            f"resolving hosted zone {config.aws_hosted_zone_id!r}: {exc}"
        ) from exc
    zone_id = short_zone_id(zone["Id"])

    try:
        engine = create_db_engine(
            config.dsn or "",
            max_open=config.max_open_connections,
            max_idle=config.max_idle_connections,
        )
    except (SQLAlchemyError, ValueError, ImportError) as exc:
        raise MigrationError(f"opening database: {exc}") from exc

    try:
        with session_scope(engine, expire_on_commit=False) as session:
            result = Migrator(session, route53, zone_id).run()
    finally:
        engine.dispose()

    logger.info("Migration finished: %s", result.summary())
    return result
