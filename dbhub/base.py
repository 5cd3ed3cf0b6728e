"""
Shared core of the DBHub clients.

BaseDBHub holds the immutable client configuration, shapes the parameters of
every remote operation, and turns HTTP responses into results or errors.
Subclasses supply make_request(), which performs the actual POST: the
blocking DBHub in dbhub.client and the asyncio AsyncDBHub in dbhub.aio.
"""

import base64
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple

from dbhub.config import settings
from dbhub.endpoints import get_endpoints, resolve
from dbhub.errors import ApiError, ConfigurationError
from dbhub.log import get_logger, log_api_error, log_response


API_KEY_FIELD = "apikey"

FormFields = Dict[str, Tuple[None, str]]


def encode_sql(sql: str) -> str:
    """Base64-encode SQL text (UTF-8) the way the service expects it."""
    return base64.b64encode(sql.encode("utf-8")).decode("ascii")


def form_value(value: Any) -> str:
    """Render a parameter value as form text. Booleans become 'true'/'false'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _error_message(response) -> Optional[str]:
    """Pull the 'error' text out of a failed response, falling back to the raw body."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error") is not None:
        return str(data["error"])
    text = response.text
    if text:
        return text
    # requests calls it 'reason', httpx 'reason_phrase'
    return getattr(response, "reason", None) or getattr(response, "reason_phrase", None)


class BaseDBHub(ABC):
    """
    Configuration and operation catalog shared by the DBHub clients.

    Args:
        api_key: API key for the DBHub.io account. Required, non-empty.
        base_url: Root URL of the service. Defaults to settings.BASE_URL.
        timeout: Optional timeout in seconds handed to the HTTP library.
            None (the default) means this client imposes no timeout.

    Raises:
        ConfigurationError: If api_key is missing or empty.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        if not api_key or not isinstance(api_key, str):
            raise ConfigurationError("Missing required API key!")

        self._api_key = api_key
        self._base_url = (base_url or settings.BASE_URL).rstrip("/")
        self._endpoints = get_endpoints()
        self._timeout = timeout
        self._logger = get_logger("http")

    # ── Read-only configuration ──────────────────────────────────

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def endpoints(self) -> Mapping[str, str]:
        return self._endpoints

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def url_for(self, operation: str) -> str:
        """Build the absolute URL for an operation name."""
        return f"{self._base_url}{resolve(self._endpoints, operation)}"

    # ── Dispatcher steps ─────────────────────────────────────────

    def build_form(self, parameters: Mapping[str, Any]) -> FormFields:
        """
        Build multipart form fields for a request.

        Each field is a (None, text) pair so the HTTP library sends it as a
        plain form field rather than a file. The API key is always written
        last, so a caller-supplied 'apikey' entry never reaches the wire.
        """
        form: FormFields = {}
        for name, value in parameters.items():
            if name == API_KEY_FIELD:
                self._logger.warning("Ignoring caller-supplied 'apikey' parameter")
                continue
            form[name] = (None, form_value(value))
        form[API_KEY_FIELD] = (None, self._api_key)
        return form

    def handle_response(self, url: str, response) -> Any:
        """
        Turn an HTTP response into a decoded JSON result.

        Returns:
            The decoded body, unchanged (dict, list or None).

        Raises:
            ApiError: If the status is not 2xx, or a 2xx body is not JSON.
        """
        status = response.status_code
        log_response(url, status)

        if not 200 <= status < 300:
            message = _error_message(response)
            log_api_error(url, status, message)
            raise ApiError(message, status)

        try:
            return response.json()
        except ValueError as exc:
            log_api_error(url, status, "response body is not valid JSON")
            raise ApiError(f"Invalid JSON in response: {exc}", status) from exc

    @abstractmethod
    def make_request(self, url: str, parameters: Mapping[str, Any]):
        """Send one authenticated POST. Implemented by the concrete clients."""

    # ── Operation catalog ────────────────────────────────────────
    #
    # Each operation returns make_request() as is: the decoded JSON for
    # DBHub, an awaitable of it for AsyncDBHub.

    def get_branches(self, dbowner: str, dbname: str):
        """
        Return the list of branches for a database.

        Args:
            dbowner: The owner of the database
            dbname: The name of the database

        Returns:
            Mapping of branch name -> branch details
        """
        return self.make_request(
            self.url_for("branches"), {"dbowner": dbowner, "dbname": dbname}
        )

    def get_columns(self, dbowner: str, dbname: str, table: str):
        """
        Return the details of all columns in a table or view, as per the
        SQLite "table_info" PRAGMA.

        Args:
            dbowner: The owner of the database
            dbname: The name of the database
            table: The name of the table or view
        """
        return self.make_request(
            self.url_for("columns"),
            {"dbowner": dbowner, "dbname": dbname, "table": table},
        )

    def get_commits(self, dbowner: str, dbname: str):
        """Return the details of all commits for a database."""
        return self.make_request(
            self.url_for("commits"), {"dbowner": dbowner, "dbname": dbname}
        )

    def get_databases(self, live: bool = False):
        """
        Return the list of databases in the requesting user's account.

        Args:
            live: List live databases instead of standard ones
        """
        return self.make_request(self.url_for("databases"), {"live": live})

    def delete_database(self, dbname: str):
        """Delete a database from the requesting user's account."""
        return self.make_request(self.url_for("delete"), {"dbname": dbname})

    def execute(self, dbowner: str, dbname: str, sql: str):
        """
        Execute a SQLite statement (INSERT, UPDATE, DELETE, ...) on a live database.

        Args:
            dbowner: The owner of the database
            dbname: The name of the database
            sql: The SQL statement. It is sent base64-encoded.

        Returns:
            Execution status, e.g. the number of rows changed
        """
        return self.make_request(
            self.url_for("execute"),
            {"dbowner": dbowner, "dbname": dbname, "sql": encode_sql(sql)},
        )

    def query(self, dbowner: str, dbname: str, sql: str):
        """
        Run a SQLite SELECT query on a database.

        Args:
            dbowner: The owner of the database
            dbname: The name of the database
            sql: The SQL query. It is sent base64-encoded.

        Returns:
            List of result rows, or None when the query returns nothing
        """
        return self.make_request(
            self.url_for("query"),
            {"dbowner": dbowner, "dbname": dbname, "sql": encode_sql(sql)},
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(base_url='{self._base_url}')"
