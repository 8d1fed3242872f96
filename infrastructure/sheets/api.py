from typing import Any, Iterable, Tuple

from aiohttp import FormData

from infrastructure.sheets.base import BaseClient
from tgbot.config import Config

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"
WEBHOOK_FAILURE_MESSAGE = "Falha no webhook do Sheets"


class WebhookError(Exception):
    """The spreadsheet webhook answered with a non-2xx status."""

    def __init__(self, status: int, message: str = WEBHOOK_FAILURE_MESSAGE):
        super().__init__(message)
        self.status = status


class SheetsWebhook(BaseClient):
    """Client for the Apps Script endpoint that appends leads to the sheet."""

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__()

    @classmethod
    def from_config(cls, config: Config) -> "SheetsWebhook":
        return cls(endpoint=config.sheets.webhook_url)

    async def __aenter__(self):
        """Support for async with statement."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Ensure session is closed when exiting context."""
        await self.close()

    async def post_lead(self, pairs: Iterable[Tuple[str, str]]) -> Tuple[int, Any]:
        """Post one lead as a url-encoded form.

        Args:
            pairs: Form fields in order; a key may repeat for multi-selects

        Returns:
            Tuple of (status_code, response_data)

        Raises:
            WebhookError: if the endpoint does not answer with a 2xx status
        """
        form = FormData()
        for key, value in pairs:
            form.add_field(key, value)

        headers = {"Content-Type": FORM_CONTENT_TYPE}
        status, result = await self._make_request(
            method="POST",
            url=self.endpoint,
            headers=headers,
            data=form,
        )
        if not 200 <= status < 300:
            self.log.warning("Webhook answered %s: %r", status, result)
            raise WebhookError(status)
        return status, result
