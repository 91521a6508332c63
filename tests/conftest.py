import itertools
from datetime import datetime, timedelta
from types import SimpleNamespace

import fitz  # PyMuPDF
import pytest


class FakeQuery:
    """Just enough of the supabase-py query builder for the recipes/visitors tables."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.max_rows = None

    def select(self, *columns, count=None):
        self.op = "select"
        return self

    def insert(self, row):
        self.op = "insert"
        self.payload = row
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            if self.db.fail_inserts:
                raise RuntimeError("insert rejected by row level security")
            row = dict(self.payload)
            row.setdefault("id", next(self.db.ids))
            row.setdefault("created_at", self.db.next_timestamp())
            rows.append(row)
            return SimpleNamespace(data=[dict(row)], count=None)
        if self.op == "delete":
            gone = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=gone, count=None)

        found = [dict(r) for r in rows if self._matches(r)]
        if self.order_by:
            col, desc = self.order_by
            found.sort(key=lambda r: r.get(col), reverse=desc)
        if self.max_rows is not None:
            found = found[: self.max_rows]
        return SimpleNamespace(data=found, count=len(found))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.ids = itertools.count(1)
        self.fail_inserts = False
        self._clock = datetime(2025, 3, 1, 12, 0, 0)

    def next_timestamp(self):
        self._clock += timedelta(minutes=1)
        return self._clock.isoformat() + "+00:00"

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def sample_recipe():
    return {
        "title": "Grandma's Apple Pie",
        "description": "The one from the stained index card.",
        "ingredients": ["6 apples", "1 cup sugar", "2 pie crusts"],
        "instructions": ["Slice the apples.", "Fill the crust.", "Bake at 375F for 50 minutes."],
    }


def make_pdf(pages: int) -> bytes:
    doc = fitz.open()
    for i in range(1, pages + 1):
        page = doc.new_page()
        page.insert_text((72, 72), f"Recipe page {i}", fontsize=18)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes():
    return make_pdf
