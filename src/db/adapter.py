"""Raw SQL adapter over a SQLAlchemy session.

Gives the small ``query``/``get``/``run``/``exec`` contract for the few
places that are clearer as a single SQL statement than as ORM queries
(dashboard aggregates, bulk flag updates, maintenance scripts).
Parameters are always bound by name, never interpolated. Pass ``types``
for parameters that need a SQLAlchemy type to bind correctly, e.g. UUIDs
on backends without a native UUID column.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.orm import Session
from sqlalchemy.types import TypeEngine

TypeMap = Optional[Mapping[str, TypeEngine]]


@dataclass
class RunResult:
    """Outcome of a statement that returns no rows."""
    rowcount: int


class DatabaseAdapter:
    """Uniform query interface bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _statement(sql: str, types: TypeMap):
        statement = text(sql)
        if types:
            statement = statement.bindparams(
                *(bindparam(name, type_=type_) for name, type_ in types.items())
            )
        return statement

    def query(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        types: TypeMap = None
    ) -> List[Dict[str, Any]]:
        """Run a SELECT and return every row as a dict."""
        result = self.db.execute(self._statement(sql, types), dict(params or {}))
        return [dict(row) for row in result.mappings().all()]

    def get(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        types: TypeMap = None
    ) -> Optional[Dict[str, Any]]:
        """Run a SELECT and return the first row as a dict, or None."""
        result = self.db.execute(self._statement(sql, types), dict(params or {}))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    def run(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        types: TypeMap = None
    ) -> RunResult:
        """Run INSERT/UPDATE/DELETE in the session's transaction (caller commits)."""
        result = self.db.execute(self._statement(sql, types), dict(params or {}))
        return RunResult(rowcount=result.rowcount)

    def exec(self, script: str) -> None:
        """Run one or more ';'-separated statements and commit."""
        for statement in (part.strip() for part in script.split(";")):
            if statement:
                self.db.execute(text(statement))
        self.db.commit()
