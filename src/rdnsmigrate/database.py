from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Any, Dict, Iterator, Optional

from sqlalchemy.engine import URL, Engine, make_url
from sqlmodel import Session, SQLModel, create_engine


logger = logging.getLogger(__name__)


LEGACY_DRIVER = "mysql+pymysql"
DEFAULT_MYSQL_PORT = 3306


def _split_address(address: str) -> tuple[str, int]:
    if not address:
        return "localhost", DEFAULT_MYSQL_PORT
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, DEFAULT_MYSQL_PORT
    return host or "localhost", int(port) if port else DEFAULT_MYSQL_PORT


def convert_legacy_dsn(dsn: str) -> str:
    """Turn a Go-style MySQL DSN into a SQLAlchemy URL.

    The old tooling took DSNs such as ``user:pass@tcp(db:3306)/rdns?charset=utf8``
    or ``user@unix(/run/mysqld/mysqld.sock)/rdns``. Strings that already
    look like URLs are returned unchanged. Only ``charset`` survives from the
    query parameters; the rest are driver options that PyMySQL does not take.
    """
    if "://" in dsn:
        return dsn

    head, sep, tail = dsn.rpartition("/")
    if not sep:
        raise ValueError(f"invalid DSN, missing database name: {dsn!r}")
    database, _, params = tail.partition("?")

    creds, at, target = head.rpartition("@")
    if not at:
        creds, target = "", head
    username, _, password = creds.partition(":")

    protocol, _, address = target.partition("(")
    address = address.rstrip(")")

    query: Dict[str, Any] = {}
    for pair in params.split("&") if params else []:
        key, _, value = pair.partition("=")
        if key == "charset" and value:
            query["charset"] = value

    host: Optional[str] = None
    port: Optional[int] = None
    if protocol == "unix":
        query["unix_socket"] = address
    elif protocol in ("", "tcp"):
        host, port = _split_address(address)
    else:
        raise ValueError(f"unsupported DSN protocol: {protocol!r}")

    url = URL.create(
        LEGACY_DRIVER,
        username=username or None,
        password=password or None,
        host=host,
        port=port,
        database=database or None,
        query=query,
    )
    return url.render_as_string(hide_password=False)


def engine_options(url: str, max_open: int, max_idle: int) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": False}
    if make_url(url).get_backend_name() == "sqlite":
        # SQLite pools do not take sizing arguments.
        return options
    idle = max(max_idle, 1)
    options["pool_size"] = idle
    options["max_overflow"] = max(max_open - idle, 0)
    return options


def create_db_engine(dsn: str, max_open: int = 2000, max_idle: int = 1000) -> Engine:
    url = convert_legacy_dsn(dsn)
    engine = create_engine(url, **engine_options(url, max_open, max_idle))
    logger.info(
        "Created database engine for %s",
        make_url(url).render_as_string(hide_password=True),
    )
    return engine


def init_db(engine: Engine) -> None:
    """Create the record tables when missing; used for local runs and tests."""
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine, **kwargs: Any) -> Iterator[Session]:
    session = Session(engine, **kwargs)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
