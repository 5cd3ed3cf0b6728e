"""
Blocking client for the DBHub.io API.

Usage:
    from dbhub import DBHub

    with DBHub("your-api-key") as db:
        print(db.get_databases())
        rows = db.query("justinclift", "Join Testing.sqlite", "SELECT * FROM table1")
"""

from typing import Any, Mapping, Optional

import requests

from dbhub.base import BaseDBHub
from dbhub.errors import TransportError
from dbhub.log import log_request, log_transport_error


class DBHub(BaseDBHub):
    """
    DBHub.io client that sends requests with a requests.Session.

    Args:
        api_key: API key for the DBHub.io account.
        base_url: Root URL of the service. Defaults to settings.BASE_URL.
        timeout: Optional request timeout in seconds. None means no timeout.
        session: An existing requests.Session to send requests with. It is
            not closed by close() when supplied by the caller.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(api_key, base_url=base_url, timeout=timeout)
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def make_request(self, url: str, parameters: Mapping[str, Any]) -> Any:
        """
        POST the parameters plus the API key as multipart form data.

        Args:
            url: Absolute URL of the operation.
            parameters: Form fields for this call.

        Returns:
            The decoded JSON body.

        Raises:
            TransportError: If the request could not be sent or completed.
            ApiError: If the service returned a non-2xx status.
        """
        form = self.build_form(parameters)
        log_request(url, form)

        try:
            response = self.session.post(url, files=form, timeout=self.timeout)
        except requests.RequestException as exc:
            log_transport_error(url, exc)
            raise TransportError(f"Request to {url} failed: {exc}", cause=exc) from exc

        return self.handle_response(url, response)

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
