from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel


class RecordA(SQLModel, table=True):
    __tablename__ = "record_a"  # type: ignore[assignment]

    id: Optional[int] = Field(default=None, primary_key=True)
    fqdn: str = Field(index=True)
    type: int = Field(default=1)
    content: str
    created_on: int
    updated_on: Optional[int] = Field(default=None)
    tid: int


class MigrationResult(BaseModel):
    scanned: int = 0
    inserted: int = 0
    skipped: int = 0
    upserted: int = 0
    inserted_names: List[str] = []

    def summary(self) -> str:
        return (
            f"scanned={self.scanned}, "
            f"inserted={self.inserted}, "
            f"skipped={self.skipped}, "
            f"upserted={self.upserted}"
        )
