"""
Generic async client for a hosted PostgREST backend (Supabase tables).

This module provides table access over HTTP that works with any schema.
Row shapes are owned by the application; the client only builds queries,
sends them and classifies failures.

Example:
    from common.database import RestClient

    client = RestClient()
    await client.connect(
        url="https://xyz.supabase.co",
        api_key=service_role_key,
    )

    rows = await (
        client.table("courses")
        .select("*, category:course_categories(name, slug, icon)")
        .eq("is_published", True)
        .order("order_index")
        .execute()
    )

Singleton access:
    from common.database.rest_client import get_backend_client

    courses = await get_backend_client().table("courses").select().execute()
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────


class BackendError(Exception):
    """The hosted backend rejected a request."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


class RecordNotFoundError(BackendError):
    """A single row was requested but none matched."""

    def __init__(self, message: str = "Record not found", details: Optional[Any] = None):
        super().__init__(message, status_code=404, code="PGRST116", details=details)


class DuplicateRecordError(BackendError):
    """Unique constraint violation (Postgres 23505)."""


class BackendUnavailableError(BackendError):
    """Transport failure or 5xx from the hosted backend."""

    def __init__(self, message: str = "Backend unavailable", details: Optional[Any] = None):
        super().__init__(message, status_code=503, code="BACKEND_UNAVAILABLE", details=details)


# ─────────────────────────────────────────────────────────────────
# Singleton client instance
# ─────────────────────────────────────────────────────────────────

_backend_client: Optional["RestClient"] = None


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryBuilder:
    """
    Chainable query for one table.

    Filters and modifiers return the builder; `execute`, `single`,
    `maybe_single` and `count` send the request.
    """

    def __init__(self, client: "RestClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._params: List[Tuple[str, str]] = []
        self._orders: List[str] = []
        self._prefer: List[str] = []
        self._body: Optional[Any] = None
        self._token: Optional[str] = None

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def select(self, columns: str = "*") -> "QueryBuilder":
        self._params.append(("select", "".join(columns.split())))
        return self

    def insert(self, row: Any) -> "QueryBuilder":
        self._method = "POST"
        self._body = row
        self._prefer.append("return=representation")
        return self

    def update(self, values: Dict[str, Any]) -> "QueryBuilder":
        self._method = "PATCH"
        self._body = values
        self._prefer.append("return=representation")
        return self

    def upsert(self, row: Any, on_conflict: Optional[str] = None) -> "QueryBuilder":
        self._method = "POST"
        self._body = row
        self._prefer.extend(["resolution=merge-duplicates", "return=representation"])
        if on_conflict:
            self._params.append(("on_conflict", on_conflict))
        return self

    def delete(self) -> "QueryBuilder":
        self._method = "DELETE"
        self._prefer.append("return=representation")
        return self

    def auth(self, token: str) -> "QueryBuilder":
        """Send this query with the caller's access token instead of the client key."""
        self._token = token
        return self

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"eq.{_format_value(value)}"))
        return self

    def neq(self, column: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"neq.{_format_value(value)}"))
        return self

    def gte(self, column: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"gte.{_format_value(value)}"))
        return self

    def lte(self, column: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"lte.{_format_value(value)}"))
        return self

    def in_(self, column: str, values: Iterable[Any]) -> "QueryBuilder":
        joined = ",".join(_format_value(v) for v in values)
        self._params.append((column, f"in.({joined})"))
        return self

    def or_(self, filters: str) -> "QueryBuilder":
        self._params.append(("or", f"({filters})"))
        return self

    def ilike_any(self, columns: Iterable[str], term: str) -> "QueryBuilder":
        """Case-insensitive substring match on any of the columns."""
        # PostgREST reserves , ( ) inside or-filters
        cleaned = "".join(ch for ch in term if ch not in ",()")
        return self.or_(",".join(f"{column}.ilike.%{cleaned}%" for column in columns))

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def order(self, column: str, ascending: bool = True) -> "QueryBuilder":
        self._orders.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def limit(self, count: int) -> "QueryBuilder":
        self._params.append(("limit", str(count)))
        return self

    def range(self, start: int, end: int) -> "QueryBuilder":
        """Inclusive row range, like the JS client's .range()."""
        self._params.append(("offset", str(start)))
        self._params.append(("limit", str(end - start + 1)))
        return self

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def _build_params(self) -> List[Tuple[str, str]]:
        params = list(self._params)
        if self._orders:
            params.append(("order", ",".join(self._orders)))
        return params

    async def execute(self) -> List[Dict[str, Any]]:
        """Send the query and return the rows."""
        response = await self._client.request(
            self._method,
            f"/{self._table}",
            params=self._build_params(),
            json=self._body,
            prefer=self._prefer,
            token=self._token,
        )
        if not response.content:
            return []
        data = response.json()
        if isinstance(data, dict):
            return [data]
        return data

    async def single(self) -> Dict[str, Any]:
        """Exactly one row, or RecordNotFoundError."""
        rows = await self.execute()
        if not rows:
            raise RecordNotFoundError(f"No row in {self._table} matched")
        if len(rows) > 1:
            raise BackendError(
                f"Expected a single row from {self._table}, got {len(rows)}",
                status_code=406,
                code="PGRST116",
            )
        return rows[0]

    async def maybe_single(self) -> Optional[Dict[str, Any]]:
        """At most one row; None when nothing matched."""
        rows = await self.execute()
        if len(rows) > 1:
            raise BackendError(
                f"Expected at most one row from {self._table}, got {len(rows)}",
                status_code=406,
                code="PGRST116",
            )
        return rows[0] if rows else None

    async def count(self) -> int:
        """Exact row count of the filtered query, without fetching rows."""
        response = await self._client.request(
            "HEAD",
            f"/{self._table}",
            params=self._build_params(),
            prefer=["count=exact"],
            token=self._token,
        )
        content_range = response.headers.get("content-range", "")
        total = content_range.rsplit("/", 1)[-1]
        if not total.isdigit():
            raise BackendError(f"Missing count for {self._table}", status_code=500)
        return int(total)


class RestClient:
    """Connection manager for the hosted backend's REST interface."""

    def __init__(self):
        self._client: Optional[httpx.AsyncClient] = None
        self._base_url: Optional[str] = None

    async def connect(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Open the HTTP session against `<url>/rest/v1`.

        Args:
            url: Project URL of the hosted backend
            api_key: Service-role or anon key sent as apikey and bearer token
            timeout: Per-request timeout in seconds
            transport: Optional transport (tests use httpx.MockTransport)
        """
        self._base_url = f"{url.rstrip('/')}/rest/v1"
        logger.info(f"Connecting to backend: {self._base_url}")

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._client:
            logger.info(f"Disconnecting from backend: {self._base_url}")
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    def table(self, name: str) -> QueryBuilder:
        """Start a query against a table."""
        return QueryBuilder(self, name)

    async def ping(self) -> bool:
        """True when the REST root answers without a server error."""
        try:
            await self.request("HEAD", "/")
            return True
        except BackendError as e:
            logger.error(f"Backend ping failed: {e.message}")
            return False

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Optional[Any] = None,
        prefer: Optional[List[str]] = None,
        token: Optional[str] = None,
    ) -> httpx.Response:
        """
        Send a request and classify failures.

        Raises:
            BackendUnavailableError: Transport error or 5xx
            DuplicateRecordError: Unique constraint violation
            BackendError: Any other 4xx
        """
        if not self._client:
            raise RuntimeError("Backend client not connected")

        headers = {}
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        logger.debug(f"{method} {path} params={params}")

        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers or None
            )
        except httpx.RequestError as e:
            logger.error(f"Backend request failed: {method} {path}: {e}")
            raise BackendUnavailableError(f"Backend request failed: {e}") from e

        if response.status_code >= 500:
            logger.error(f"Backend error {response.status_code} on {method} {path}")
            raise BackendUnavailableError(
                f"Backend returned {response.status_code}",
                details=response.text or None,
            )

        if response.status_code >= 400:
            payload = _error_payload(response)
            code = payload.get("code")
            message = payload.get("message") or f"Backend returned {response.status_code}"
            if code == "23505" or response.status_code == 409:
                raise DuplicateRecordError(message, status_code=409, code=code, details=payload.get("details"))
            if code == "PGRST116":
                raise RecordNotFoundError(message, details=payload.get("details"))
            raise BackendError(message, status_code=response.status_code, code=code, details=payload.get("details"))

        return response


def _error_payload(response: httpx.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {"message": response.text}
    return payload if isinstance(payload, dict) else {"message": str(payload)}


# ─────────────────────────────────────────────────────────────────
# Singleton initialization and getters
# ─────────────────────────────────────────────────────────────────

def set_backend_client(client: RestClient) -> None:
    """Set the backend client singleton from a connected RestClient."""
    global _backend_client
    _backend_client = client
    logger.info("Backend client singleton set")


def get_backend_client() -> RestClient:
    """
    Get the backend client singleton.

    Raises:
        RuntimeError: If the client was not set
    """
    if _backend_client is None:
        raise RuntimeError("Backend client not initialized. Call set_backend_client() first.")
    return _backend_client
