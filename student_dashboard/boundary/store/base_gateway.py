"""
Base gateway operations for Supabase tables.

Provides generic list/get/insert/update/delete calls that can be
inherited and extended by table-specific gateway classes. Each call is a
single best-effort round trip: no retries, no batching.

Dependencies: supabase (postgrest), httpx
System role: Foundation for all hosted-store calls
"""

import logging
from typing import Any, Mapping

import httpx
from supabase import PostgrestAPIError

from student_dashboard.core.exceptions import RemoteError

logger = logging.getLogger(__name__)

# PostgREST code for "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"


class BaseGateway:
    """
    Generic base class for table calls.

    Subclasses specify the table, the ordering column for listings and the
    columns callers may never write. Rows are returned as plain dicts in the
    application's shape; typing happens at the service layer.

    Attributes:
        table: Table name in the hosted store
        order_column: Column listings are sorted by (ascending)
        protected_fields: Columns stripped from caller-supplied values
        select_columns: PostgREST select expression
    """

    def __init__(
        self,
        table: str,
        order_column: str,
        protected_fields: frozenset[str],
        select_columns: str = "*",
    ) -> None:
        """
        Initialize gateway with target table.

        Args:
            table: Table name
            order_column: Column used to order listings
            protected_fields: Identity and timestamp columns callers cannot set
            select_columns: Select expression, may include embedded relations
        """
        self.table = table
        self.order_column = order_column
        self.protected_fields = protected_fields
        self.select_columns = select_columns

    def normalize_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Map a raw store row into the application's row shape."""
        return dict(row)

    def strip_protected(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """
        Drop identity and creation-timestamp columns from caller values.

        Args:
            values: Caller-supplied column values

        Returns:
            dict: Values safe to dispatch
        """
        stripped = sorted(key for key in values if key in self.protected_fields)
        if stripped:
            logger.warning(
                "Ignoring protected fields in write",
                extra={"table": self.table, "fields": stripped},
            )
        return {k: v for k, v in values.items() if k not in self.protected_fields}

    async def _execute(self, query: Any, operation: str) -> Any:
        """
        Run a built query, translating backend failures into RemoteError.

        Args:
            query: PostgREST request builder
            operation: Operation name for error context

        Returns:
            APIResponse: Response with `.data`

        Raises:
            RemoteError: If the backend or the network call fails
        """
        try:
            return await query.execute()
        except PostgrestAPIError as e:
            raise RemoteError(
                e.message or "Store request failed",
                code=e.code,
                hint=e.hint,
                operation=operation,
                details={"table": self.table, "backend_details": e.details},
            ) from e
        except httpx.HTTPError as e:
            raise RemoteError(
                str(e) or "Network error",
                code="network_error",
                operation=operation,
                details={"table": self.table},
            ) from e

    async def list_rows(self, client: Any, owner_id: str) -> list[dict[str, Any]]:
        """
        Retrieve all rows owned by a user, ordered ascending.

        Args:
            client: Supabase client
            owner_id: Owning user id

        Returns:
            list[dict]: Normalized rows
        """
        query = (
            client.table(self.table)
            .select(self.select_columns)
            .eq("user_id", owner_id)
            .order(self.order_column)
        )
        response = await self._execute(query, "list")
        return [self.normalize_row(row) for row in response.data or []]

    async def get_row(self, client: Any, owner_id: str, id: str) -> dict[str, Any] | None:
        """
        Retrieve a single row by primary key, scoped to its owner.

        Args:
            client: Supabase client
            owner_id: Owning user id
            id: Row id

        Returns:
            dict if found, None when no row matches for this owner
        """
        query = (
            client.table(self.table)
            .select(self.select_columns)
            .eq("id", id)
            .eq("user_id", owner_id)
            .single()
        )
        try:
            response = await self._execute(query, "get")
        except RemoteError as e:
            if e.code == NO_ROWS_CODE:
                return None
            raise
        if not response.data:
            return None
        return self.normalize_row(response.data)

    async def insert_row(self, client: Any, values: Mapping[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it as stored.

        Args:
            client: Supabase client
            values: Column values (protected columns must already be handled)

        Returns:
            dict: Created row with generated id and timestamps
        """
        response = await self._execute(client.table(self.table).insert(dict(values)), "create")
        rows = response.data or []
        if not rows:
            raise RemoteError(
                "Store returned no row for insert",
                code="empty_response",
                operation="create",
                details={"table": self.table},
            )
        return self.normalize_row(rows[0])

    async def update_row(
        self,
        client: Any,
        owner_id: str,
        id: str,
        values: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Update a row by primary key, scoped to its owner.

        Args:
            client: Supabase client
            owner_id: Owning user id
            id: Row id
            values: Columns to update

        Returns:
            dict: Updated row

        Raises:
            RemoteError: If no row matched for this owner (code "not_found") or the call fails
        """
        query = client.table(self.table).update(dict(values)).eq("id", id).eq("user_id", owner_id)
        response = await self._execute(query, "update")
        rows = response.data or []
        if not rows:
            raise RemoteError(
                f"{self.table} row {id} does not exist",
                code="not_found",
                operation="update",
                details={"table": self.table, "id": id},
            )
        return self.normalize_row(rows[0])

    async def delete_row(self, client: Any, owner_id: str, id: str) -> bool:
        """
        Delete a row by primary key, scoped to its owner.

        Deleting an id that no longer exists is not an error.

        Args:
            client: Supabase client
            owner_id: Owning user id
            id: Row id

        Returns:
            bool: True once the row is absent
        """
        query = client.table(self.table).delete().eq("id", id).eq("user_id", owner_id)
        response = await self._execute(query, "delete")
        if not response.data:
            logger.info(
                "Delete matched no row",
                extra={"table": self.table, "id": id},
            )
        return True
