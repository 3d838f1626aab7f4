"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory Supabase query builder, fake auth provider, session and
entity factories
Dependencies: pytest, supabase (error types)
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from supabase import PostgrestAPIError

from student_dashboard.boundary.auth.ports import AuthSession, AuthUser

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class FakeResponse:
    """Stand-in for postgrest's APIResponse."""

    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    """Chainable request builder mirroring the postgrest calls the gateways use."""

    def __init__(self, store: "FakeStore", table: str) -> None:
        self.store = store
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.filters: list[tuple[str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.single_row = False
        self.payload: dict[str, Any] = {}

    def select(self, columns: str = "*") -> "FakeQuery":
        self.columns = columns
        return self

    def insert(self, values: dict[str, Any]) -> "FakeQuery":
        self.operation = "insert"
        self.payload = dict(values)
        return self

    def update(self, values: dict[str, Any]) -> "FakeQuery":
        self.operation = "update"
        self.payload = dict(values)
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def single(self) -> "FakeQuery":
        self.single_row = True
        return self

    async def execute(self) -> FakeResponse:
        return self.store.run(self)


class FakeStore:
    """
    Two-table in-memory store behind FakeStoreClient.

    Applies the column defaults the real tables have and records every call.
    Set `fail_next` to make the next executed query raise.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {"courses": [], "tasks": []}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_next: Exception | None = None
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _matches(self, row: dict[str, Any], query: FakeQuery) -> bool:
        return all(row.get(column) == value for column, value in query.filters)

    def _project(self, table: str, row: dict[str, Any], columns: str) -> dict[str, Any]:
        projected = dict(row)
        if table == "tasks" and "courses(name)" in columns:
            course = next(
                (c for c in self.tables["courses"] if c["id"] == row.get("course_id")),
                None,
            )
            projected["courses"] = {"name": course["name"]} if course else None
        return projected

    def seed(self, table: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, bypassing gateway calls."""
        row = self._with_defaults(table, values)
        self.tables[table].append(row)
        return dict(row)

    def _with_defaults(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        row = {"id": str(uuid.uuid4()), "created_at": self._now()}
        if table == "courses":
            row.update(lecturer=None, semester=None, sks=None, description=None, category=None)
        else:
            row.update(description=None, status="pending", updated_at=None)
        row.update(values)
        return row

    def run(self, query: FakeQuery) -> FakeResponse:
        self.calls.append((query.table, query.operation, dict(query.payload)))
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

        rows = self.tables[query.table]

        if query.operation == "insert":
            row = self._with_defaults(query.table, query.payload)
            rows.append(row)
            return FakeResponse([dict(row)])

        matched = [row for row in rows if self._matches(row, query)]

        if query.operation == "update":
            for row in matched:
                row.update(query.payload)
            return FakeResponse([dict(row) for row in matched])

        if query.operation == "delete":
            self.tables[query.table] = [row for row in rows if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        if query.order_by is not None:
            column, desc = query.order_by
            matched = sorted(matched, key=lambda row: row[column], reverse=desc)
        projected = [self._project(query.table, row, query.columns) for row in matched]

        if query.single_row:
            if len(projected) != 1:
                raise PostgrestAPIError(
                    {
                        "message": "JSON object requested, multiple (or no) rows returned",
                        "code": "PGRST116",
                        "hint": None,
                        "details": f"The result contains {len(projected)} rows",
                    }
                )
            return FakeResponse(projected[0])
        return FakeResponse(projected)

    def count(self, table: str, operation: str | None = None) -> int:
        """Number of recorded calls against a table (optionally of one kind)."""
        return sum(
            1
            for called_table, called_op, _ in self.calls
            if called_table == table and (operation is None or called_op == operation)
        )


class FakeStoreClient:
    """Supabase client stand-in exposing only `table()`."""

    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.store, name)


# ---------------------------------------------------------------------------
# Auth provider
# ---------------------------------------------------------------------------


class FakeSubscription:
    def __init__(self, provider: "FakeAuthProvider", callback) -> None:
        self.provider = provider
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        self.active = False
        if self.callback in self.provider.callbacks:
            self.provider.callbacks.remove(self.callback)


class FakeAuthProvider:
    """AuthProvider stand-in with a controllable session and change stream."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self.session = session
        self.callbacks: list = []
        self.users_by_token: dict[str, AuthUser] = {}
        self.signed_out_tokens: list[str | None] = []
        self.get_session_error: Exception | None = None

    async def get_session(self) -> AuthSession | None:
        if self.get_session_error is not None:
            raise self.get_session_error
        return self.session

    def on_auth_state_change(self, callback) -> FakeSubscription:
        self.callbacks.append(callback)
        return FakeSubscription(self, callback)

    def emit(self, event: str, session: AuthSession | None) -> None:
        """Push an event through the change stream."""
        self.session = session
        for callback in list(self.callbacks):
            callback(event, session)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        return self.session

    async def sign_up(self, email: str, password: str, full_name: str | None = None):
        return AuthUser(id="new-user", email=email, full_name=full_name)

    async def sign_out(self, access_token: str | None = None) -> None:
        self.signed_out_tokens.append(access_token)

    async def get_user(self, access_token: str) -> AuthUser | None:
        return self.users_by_token.get(access_token)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def make_session(user_id: str = USER_ID, email: str = "student@example.com") -> AuthSession:
    return AuthSession(
        access_token=f"token-{user_id}",
        user=AuthUser(id=user_id, email=email, full_name="Student"),
    )


@pytest.fixture
def fake_store() -> FakeStore:
    """Empty two-table store."""
    return FakeStore()


@pytest.fixture
def store_client(fake_store: FakeStore) -> FakeStoreClient:
    """Supabase client stand-in over `fake_store`."""
    return FakeStoreClient(fake_store)


@pytest.fixture
def user_session() -> AuthSession:
    return make_session()


@pytest.fixture
def other_session() -> AuthSession:
    return make_session(OTHER_USER_ID, "other@example.com")


@pytest.fixture
def signed_in_provider(user_session: AuthSession) -> FakeAuthProvider:
    """Provider that resolves to an active session."""
    return FakeAuthProvider(session=user_session)


@pytest.fixture
def signed_out_provider() -> FakeAuthProvider:
    """Provider that resolves to no session."""
    return FakeAuthProvider(session=None)


@pytest.fixture
def store_error():
    """Factory for PostgREST errors as raised by the client."""

    def _make(code: str = "23505", message: str = "duplicate key value", hint: str | None = None):
        return PostgrestAPIError({"message": message, "code": code, "hint": hint, "details": None})

    return _make
