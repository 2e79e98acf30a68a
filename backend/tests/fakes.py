"""
In-memory stand-in for the Supabase client used by the tests: PostgREST-style
table queries, storage buckets and the auth endpoints the app calls.
"""

import copy
import re
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable


class SimulatedError(Exception):
    pass


def _as_dt(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


def _sort_key(value: Any) -> tuple:
    # NULLs sort last, like Postgres ascending order
    if value is None:
        return (1, 0)
    return (0, _as_dt(value))


# Column defaults the real tables declare
TABLE_DEFAULTS: dict[str, dict[str, Any]] = {
    "accounts": {"is_sold": False, "sold_at": None, "deleted_at": None, "images": []},
    "ads": {"is_active": True},
}


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]], count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeDatabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self._created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self._failures: list[tuple[str, str, Callable[[dict[str, Any]], bool] | None]] = []
        self._hooks: list[tuple[str, str, Callable[["FakeDatabase"], None]]] = []

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        for key, value in TABLE_DEFAULTS.get(table, {}).items():
            row.setdefault(key, copy.deepcopy(value))
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self._next_created())
        self.rows(table).append(row)
        return row

    def find(self, table: str, row_id: str) -> dict[str, Any] | None:
        return next((r for r in self.rows(table) if r.get("id") == row_id), None)

    def fail_when(
        self,
        table: str,
        op: str,
        predicate: Callable[[dict[str, Any]], bool] | None = None,
    ) -> None:
        """Make ``op`` on ``table`` raise when any affected row matches predicate."""
        self._failures.append((table, op, predicate))

    def before(self, table: str, op: str, hook: Callable[["FakeDatabase"], None]) -> None:
        """Run hook once right before the next ``op`` on ``table`` executes."""
        self._hooks.append((table, op, hook))

    def _next_created(self) -> str:
        self._created += timedelta(seconds=1)
        return self._created.isoformat().replace("+00:00", "Z")

    def _run_hooks(self, table: str, op: str) -> None:
        for entry in list(self._hooks):
            if entry[0] == table and entry[1] == op:
                self._hooks.remove(entry)
                entry[2](self)

    def _check_failure(self, table: str, op: str, rows: list[dict[str, Any]]) -> None:
        for t, o, predicate in self._failures:
            if t != table or o != op:
                continue
            if predicate is None or any(predicate(r) for r in rows):
                raise SimulatedError(f"simulated {op} failure on {table}")


class FakeQuery:
    def __init__(self, db: FakeDatabase, table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.columns: list[str] | None = None
        self.payload: Any = None
        self.count_mode: str | None = None
        self.filters: list[Callable[[dict[str, Any]], bool]] = []
        self.orders: list[tuple[str, bool]] = []
        self.bounds: tuple[int, int] | None = None
        self.max_rows: int | None = None

    # operations
    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.op = "select"
        self.count_mode = count
        if columns.strip() != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    # filters
    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda r: r.get(column) == value)
        return self

    def lt(self, column: str, value: Any) -> "FakeQuery":
        def check(r: dict[str, Any]) -> bool:
            current = r.get(column)
            return current is not None and _as_dt(current) < _as_dt(value)
        self.filters.append(check)
        return self

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        regex = re.compile(
            "".join(".*" if ch == "%" else re.escape(ch) for ch in pattern),
            re.IGNORECASE | re.DOTALL,
        )
        self.filters.append(lambda r: bool(regex.fullmatch(str(r.get(column) or ""))))
        return self

    # modifiers
    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self.bounds = (start, end)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.max_rows = n
        return self

    def _matching(self) -> list[dict[str, Any]]:
        return [r for r in self.db.rows(self.table) if all(f(r) for f in self.filters)]

    def _project(self, row: dict[str, Any]) -> dict[str, Any]:
        row = copy.deepcopy(row)
        if self.columns is None:
            return row
        return {c: row.get(c) for c in self.columns}

    def execute(self) -> FakeResponse:
        self.db._run_hooks(self.table, self.op)
        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            self.db._check_failure(self.table, "insert", items)
            out = []
            for item in items:
                row = copy.deepcopy(item)
                for key, value in TABLE_DEFAULTS.get(self.table, {}).items():
                    row.setdefault(key, copy.deepcopy(value))
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", self.db._next_created())
                self.db.rows(self.table).append(row)
                out.append(copy.deepcopy(row))
            return FakeResponse(out)

        matched = self._matching()
        if self.op == "update":
            self.db._check_failure(self.table, "update", matched)
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse([copy.deepcopy(r) for r in matched])

        if self.op == "delete":
            self.db._check_failure(self.table, "delete", matched)
            table = self.db.rows(self.table)
            for row in matched:
                table.remove(row)
            return FakeResponse([copy.deepcopy(r) for r in matched])

        self.db._check_failure(self.table, "select", matched)
        rows = list(matched)
        for column, desc in reversed(self.orders):
            rows.sort(key=lambda r: _sort_key(r.get(column)), reverse=desc)
        total = len(rows)
        if self.bounds is not None:
            rows = rows[self.bounds[0]: self.bounds[1] + 1]
        if self.max_rows is not None:
            rows = rows[: self.max_rows]
        return FakeResponse(
            [self._project(r) for r in rows],
            count=total if self.count_mode == "exact" else None,
        )


class FakeBucket:
    def __init__(self, name: str, base_url: str) -> None:
        self.name = name
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.fail_remove = False
        self.removed: list[str] = []

    def upload(self, path: str, file: bytes, file_options: dict[str, Any] | None = None) -> Any:
        if path in self.objects:
            raise SimulatedError("The resource already exists")
        self.objects[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: list[str]) -> list[dict[str, Any]]:
        if self.fail_remove:
            raise SimulatedError("storage unavailable")
        out = []
        for p in paths:
            self.removed.append(p)
            if self.objects.pop(p, None) is not None:
                out.append({"name": p})
        return out


class FakeStorage:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.buckets: dict[str, FakeBucket] = {}

    def from_(self, name: str) -> FakeBucket:
        if name not in self.buckets:
            self.buckets[name] = FakeBucket(name, self.base_url)
        return self.buckets[name]


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth") -> None:
        self.auth = auth
        self.signed_out: list[str] = []

    def update_user_by_id(self, uid: str, attributes: dict[str, Any]) -> Any:
        for user in self.auth.users.values():
            if user["id"] == uid:
                user.update(attributes)
                return SimpleNamespace(user=SimpleNamespace(id=uid, email=user["email"]))
        raise SimulatedError("User not found")

    def sign_out(self, jwt: str, scope: str = "global") -> None:
        self.signed_out.append(jwt)


class FakeAuth:
    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.tokens: dict[str, str] = {}
        self.admin = FakeAuthAdmin(self)

    def add_user(self, email: str, password: str, confirmed: bool = True) -> dict[str, Any]:
        user = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password": password,
            "confirmed": confirmed,
            "created_at": "2025-01-15T10:30:00Z",
        }
        self.users[email] = user
        return user

    def sign_in_with_password(self, credentials: dict[str, str]) -> Any:
        user = self.users.get(credentials["email"])
        if not user or user["password"] != credentials["password"]:
            raise SimulatedError("Invalid login credentials")
        if not user["confirmed"]:
            raise SimulatedError("Email not confirmed")
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = user["email"]
        return SimpleNamespace(
            user=SimpleNamespace(id=user["id"], email=user["email"], created_at=user["created_at"]),
            session=SimpleNamespace(
                access_token=token,
                expires_in=3600,
                expires_at=1736932200,
                refresh_token="refresh-" + token,
            ),
        )

    def get_user(self, token: str) -> Any:
        email = self.tokens.get(token)
        if not email:
            raise SimulatedError("invalid JWT")
        user = self.users[email]
        return SimpleNamespace(user=SimpleNamespace(id=user["id"], email=email))


class FakeSupabaseClient:
    def __init__(self, base_url: str = "https://fake.supabase.co") -> None:
        self.db = FakeDatabase()
        self.storage = FakeStorage(base_url)
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.db, name)
