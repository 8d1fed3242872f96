import logging
from typing import Any, Optional

from aiohttp import ClientSession, ContentTypeError


class BaseClient:
    def __init__(self, base_url: Optional[str] = None):
        self._base_url = base_url
        self._session: Optional[ClientSession] = None
        self.log = logging.getLogger(self.__class__.__name__)

    async def _get_session(self) -> ClientSession:
        """Get aiohttp session, opening one on first use."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(base_url=self._base_url)
        return self._session

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        headers: Optional[dict] = None,
        data: Any = None,
    ) -> tuple[int, Any]:
        """Send a request and return its status with the decoded body.

        JSON bodies are decoded, anything else comes back as text.
        """
        session = await self._get_session()

        self.log.debug("Making request %r %r with params %r", method, url, params)

        async with session.request(
            method, url, params=params, json=json, headers=headers, data=data
        ) as response:
            status = response.status
            try:
                result = await response.json()
            except (ContentTypeError, ValueError):
                result = await response.text()

        self.log.debug("Got response %r %r with status %r", method, url, status)
        return status, result

    async def close(self):
        """Close the client session if it was opened."""
        if self._session is None:
            return

        if not self._session.closed:
            await self._session.close()
