"""
Asynchronous client for the DBHub.io API.

Every operation is a coroutine, so many calls can be in flight at once on
one client:

    import asyncio
    from dbhub import AsyncDBHub

    async def main():
        async with AsyncDBHub("your-api-key") as db:
            branches, commits = await asyncio.gather(
                db.get_branches("justinclift", "Join Testing.sqlite"),
                db.get_commits("justinclift", "Join Testing.sqlite"),
            )

    asyncio.run(main())
"""

from typing import Any, Mapping, Optional

import httpx

from dbhub.base import BaseDBHub
from dbhub.errors import TransportError
from dbhub.log import log_request, log_transport_error


class AsyncDBHub(BaseDBHub):
    """
    DBHub.io client that sends requests with an httpx.AsyncClient.

    Args:
        api_key: API key for the DBHub.io account.
        base_url: Root URL of the service. Defaults to settings.BASE_URL.
        timeout: Optional request timeout in seconds. None means no timeout.
        client: An existing httpx.AsyncClient. It is not closed by aclose()
            when supplied by the caller.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key, base_url=base_url, timeout=timeout)
        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient()

    async def make_request(self, url: str, parameters: Mapping[str, Any]) -> Any:
        """
        POST the parameters plus the API key as multipart form data.

        Raises:
            TransportError: If the request could not be sent or completed.
            ApiError: If the service returned a non-2xx status.
        """
        form = self.build_form(parameters)
        log_request(url, form)

        try:
            response = await self.client.post(url, files=form, timeout=self.timeout)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            log_transport_error(url, exc)
            raise TransportError(f"Request to {url} failed: {exc}", cause=exc) from exc

        return self.handle_response(url, response)

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False
