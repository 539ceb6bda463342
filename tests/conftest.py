from __future__ import annotations

from typing import Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import Session

from rdnsmigrate.database import create_db_engine, init_db
from rdnsmigrate.models import RecordA


@pytest.fixture
def sample_domain() -> str:
    return "example.com"


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'rdns.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def wildcard_record(session: Session, sample_domain: str) -> RecordA:
    record = RecordA(
        fqdn="\\052." + sample_domain,
        type=1,
        content="1.2.3.4",
        created_on=1500000000,
        updated_on=1500000100,
        tid=7,
    )
    session.add(record)
    session.commit()
    return record
