# Backend/tests/fixtures/__init__.py
"""
Test fixtures for the record store.

`FakeSupabase` mimics the slice of the async Supabase client the services
use (table().select/insert/update/delete, eq/in_/overlaps, order, limit,
rpc, await execute()) over plain in-memory rows.

Factory functions:
- make_country()
- make_newspaper()
- make_news_list()
- make_article()
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Set
from uuid import uuid4

from postgrest.exceptions import APIError

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._op = "select"
        self._columns = "*"
        self._payload: Any = None
        self._filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self.applied: List[tuple] = []

    # --- operations ---
    def select(self, columns: str = "*") -> "FakeQuery":
        self._columns = columns
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op = "insert"
        self._payload = dict(payload)
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = dict(payload)
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    # --- filters ---
    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.applied.append(("eq", column, value))
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]) -> "FakeQuery":
        values = list(values)
        self.applied.append(("in", column, values))
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def overlaps(self, column: str, values: List[Any]) -> "FakeQuery":
        wanted = set(values)
        self.applied.append(("ov", column, list(values)))
        self._filters.append(lambda row: bool(set(row.get(column) or []) & wanted))
        return self

    def order(self, column: str, *, desc: bool = False, nullsfirst: Optional[bool] = None) -> "FakeQuery":
        self.applied.append(("order", column, desc, nullsfirst))
        # Postgres default: NULLs sort as the largest value
        if nullsfirst is None:
            nullsfirst = desc
        self._order = (column, desc, nullsfirst)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self.applied.append(("limit", size))
        self._limit = size
        return self

    # --- execution ---
    def _matching(self) -> List[Dict[str, Any]]:
        rows = [r for r in self._db.tables.setdefault(self._table, []) if all(f(r) for f in self._filters)]
        if self._order is not None:
            column, desc, nullsfirst = self._order
            present = sorted((r for r in rows if r.get(column) is not None), key=lambda r: r[column], reverse=desc)
            missing = [r for r in rows if r.get(column) is None]
            rows = missing + present if nullsfirst else present + missing
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(row)
        if "newspaper(name)" in self._columns and "newspaper_id" in row:
            paper = next(
                (p for p in self._db.tables.get("newspaper", []) if p.get("id") == row["newspaper_id"]),
                None,
            )
            out["newspaper"] = {"name": paper.get("name")} if paper else None
        return out

    async def execute(self) -> FakeResponse:
        self._db.queries.append(self)
        if self._table in self._db.failing:
            raise APIError({"message": f"{self._table} unavailable", "code": "XX000", "hint": None, "details": None})

        table = self._db.tables.setdefault(self._table, [])
        if self._op == "insert":
            row = dict(self._payload)
            row.setdefault("id", self._db.next_id(self._table))
            table.append(row)
            return FakeResponse([dict(row)])
        if self._op == "update":
            matched = self._matching()
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(r) for r in matched])
        if self._op == "delete":
            matched = self._matching()
            self._db.tables[self._table] = [r for r in table if r not in matched]
            return FakeResponse([dict(r) for r in matched])
        return FakeResponse([self._project(r) for r in self._matching()])


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str) -> None:
        self._db = db
        self._name = name

    async def execute(self) -> FakeResponse:
        if self._name in self._db.failing:
            raise APIError({"message": f"{self._name} failed", "code": "XX000", "hint": None, "details": None})
        return FakeResponse(list(self._db.rpc_results.get(self._name, [])))


class FakeSupabase:
    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {k: list(v) for k, v in (tables or {}).items()}
        self.rpc_results: Dict[str, List[Dict[str, Any]]] = {}
        self.failing: Set[str] = set()
        self.queries: List[FakeQuery] = []
        self._ids = itertools.count(1000)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    from_ = table

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> FakeRpc:
        return FakeRpc(self, name)

    def next_id(self, table: str) -> Any:
        if table == "newspaper_list":
            return str(uuid4())
        return next(self._ids)


def make_country(
    id: int = 1,
    name: str = "Deutschland",
    full_name: str = "Bundesrepublik Deutschland",
    short: str = "DE",
    author: Optional[str] = None,
) -> Dict[str, Any]:
    return {"id": id, "name": name, "full_name": full_name, "short": short, "author": author}


def make_newspaper(
    id: int = 1,
    name: str = "Tagesblatt",
    country: int = 1,
    rss: str = "https://tagesblatt.example/rss",
    url: Optional[str] = "https://tagesblatt.example",
    description: Optional[str] = None,
    author: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": id,
        "name": name,
        "url": url,
        "rss": rss,
        "country": country,
        "description": description,
        "author": author,
    }


def make_news_list(
    id: Optional[str] = None,
    name: str = "Morgenlage",
    newspapers: Optional[List[int]] = None,
    filter_authors: Optional[List[str]] = None,
    filter_categories: Optional[List[str]] = None,
    author: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": id or str(uuid4()),
        "name": name,
        "newspapers": [1] if newspapers is None else newspapers,
        "filter_authors": filter_authors,
        "filter_categories": filter_categories,
        "author": author,
    }


def make_article(
    id: int = 1,
    newspaper_id: int = 1,
    title: Optional[str] = "Schlagzeile",
    author: Optional[str] = None,
    categories: Optional[List[str]] = None,
    minutes: int = 0,
    snippet: Optional[str] = "Kurzfassung",
    content_html: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    """`minutes` shifts published_at forward from BASE_TIME."""
    return {
        "id": id,
        "newspaper_id": newspaper_id,
        "title": title,
        "link": f"https://news.example/{id}",
        "snippet": snippet,
        "content_html": content_html,
        "image_url": image_url,
        "author": author,
        "categories": categories,
        "published_at": (BASE_TIME + timedelta(minutes=minutes)).isoformat(),
    }
