"""In-memory stand-in for the Supabase client used by the services.

Covers the PostgREST builder calls the app makes (select/insert/update/delete,
eq/in_/is_, order/limit/offset, maybe_single/single, count) plus the
end_workshop RPC and auth.get_user.
"""
import copy
import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional


class FakeAPIError(Exception):
    pass


class FakeResponse:
    def __init__(self, data: Any, count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.op = "select"
        self.columns: Optional[List[str]] = None
        self.count_mode: Optional[str] = None
        self.head = False
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.orders: List[tuple] = []
        self._limit: Optional[int] = None
        self._offset = 0
        self.single_mode: Optional[str] = None

    # builder
    def select(self, *columns, count=None, head=None):
        self.op = "select"
        cols = ",".join(columns) if columns else "*"
        self.columns = None if cols.strip() == "*" else [c.strip() for c in cols.split(",")]
        self.count_mode = count
        self.head = bool(head)
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def is_(self, column, value):
        self.filters.append(("is", column, None if value in (None, "null") else value))
        return self

    def order(self, column, desc=False, **kwargs):
        self.orders.append((column, desc))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def offset(self, n):
        self._offset = n
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    # evaluation
    def _matches(self, row: dict) -> bool:
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "in" and row.get(column) not in value:
                return False
            if kind == "is" and row.get(column) is not value:
                return False
        return True

    def _project(self, row: dict) -> dict:
        if self.columns is None:
            return copy.deepcopy(row)
        return {c: copy.deepcopy(row.get(c)) for c in self.columns}

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table_name, self.op))
        failure = self.db.failures.pop((self.table_name, self.op), None)
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db._new_row(self.table_name, item) for item in items]
            rows.extend(created)
            return FakeResponse([copy.deepcopy(r) for r in created])

        matching = [r for r in rows if self._matches(r)]

        if self.op == "update":
            for r in matching:
                r.update(copy.deepcopy(self.payload))
            return FakeResponse([copy.deepcopy(r) for r in matching])

        if self.op == "delete":
            self.db.tables[self.table_name] = [r for r in rows if not self._matches(r)]
            return FakeResponse([copy.deepcopy(r) for r in matching])

        for column, desc in reversed(self.orders):
            matching.sort(
                key=lambda r: (r.get(column) is None, r.get(column) if r.get(column) is not None else 0),
                reverse=desc,
            )
        total = len(matching)
        matching = matching[self._offset:]
        if self._limit is not None:
            matching = matching[:self._limit]
        data = [self._project(r) for r in matching]

        if self.single_mode == "maybe":
            return FakeResponse(data[0] if data else None, total if self.count_mode else None)
        if self.single_mode == "single":
            if len(data) != 1:
                raise FakeAPIError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data[0])
        if self.head:
            data = []
        return FakeResponse(data, total if self.count_mode else None)


class FakeRPC:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.name, "rpc"))
        failure = self.db.failures.pop((self.name, "rpc"), None)
        if failure is not None:
            raise failure
        if self.name != "end_workshop":
            raise FakeAPIError(f"function {self.name} does not exist")
        workshop_id = self.params["p_workshop_id"]
        workshop = self.db.find("workshops", workshop_id)
        if workshop is None or workshop.get("status") != "live":
            raise FakeAPIError(f"workshop {workshop_id} is not live")
        for task in self.db.tables.get("workshop_tasks", []):
            if task["workshop_id"] == workshop_id:
                task["is_active"] = False
                task["is_ended"] = True
        workshop["status"] = "completed"
        workshop["updated_at"] = self.db.now()
        return FakeResponse(copy.deepcopy(workshop))


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}

    def add_user(self, token: str, user_id: str, email: str, app_metadata: Optional[dict] = None):
        self.users[token] = SimpleNamespace(
            id=user_id, email=email, user_metadata={}, app_metadata=app_metadata or {}
        )

    def get_user(self, jwt: str):
        user = self.users.get(jwt)
        if user is None:
            raise FakeAPIError("invalid JWT")
        return SimpleNamespace(user=user)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.failures: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []
        self.auth = FakeAuth()
        self._clock = itertools.count()
        self._epoch = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self) -> str:
        return (self._epoch + timedelta(seconds=next(self._clock))).isoformat()

    def _new_row(self, table: str, item: dict) -> dict:
        row = copy.deepcopy(item)
        row.setdefault("id", str(uuid.uuid4()))
        if table == "workshop_judges":
            row.setdefault("assigned_at", self.now())
        else:
            row.setdefault("created_at", self.now())
        return row

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRPC:
        return FakeRPC(self, name, params)

    # test helpers
    def seed(self, table: str, **values) -> dict:
        row = self._new_row(table, values)
        self.tables.setdefault(table, []).append(row)
        return row

    def find(self, table: str, row_id: str) -> Optional[dict]:
        return next((r for r in self.tables.get(table, []) if r["id"] == row_id), None)

    def rows(self, table: str, **filters) -> List[dict]:
        return [
            r for r in self.tables.get(table, [])
            if all(r.get(k) == v for k, v in filters.items())
        ]

    def fail_next(self, table: str, op: str, error: Optional[Exception] = None):
        self.failures[(table, op)] = error or FakeAPIError(f"{op} on {table} failed")


class AnonSupabase(FakeSupabase):
    """Anon-key client without a user session: RLS rejects every table and RPC call."""

    def table(self, name: str) -> FakeQuery:
        raise FakeAPIError(f'new row violates row-level security policy for table "{name}"')

    def rpc(self, name: str, params: dict) -> FakeRPC:
        raise FakeAPIError(f"permission denied for function {name}")
