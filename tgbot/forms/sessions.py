import logging
from typing import Dict, Optional

from infrastructure.sheets.api import SheetsWebhook
from tgbot.config import Config
from tgbot.forms.controller import LeadFormController

logger = logging.getLogger(__name__)


class FormSessions:
    """One form controller per chat, all posting through one webhook client."""

    def __init__(self, webhook: Optional[SheetsWebhook] = None):
        self.webhook = webhook
        self._forms: Dict[int, LeadFormController] = {}

    @classmethod
    def from_config(cls, config: Config) -> "FormSessions":
        if not config.sheets.is_configured:
            logger.warning("SHEETS_WEBHOOK is empty, leads will only be logged")
            return cls()
        return cls(SheetsWebhook.from_config(config))

    def get(self, chat_id: int) -> LeadFormController:
        form = self._forms.get(chat_id)
        if form is None:
            form = LeadFormController(webhook=self.webhook)
            self._forms[chat_id] = form
        return form

    def discard(self, chat_id: int):
        self._forms.pop(chat_id, None)

    async def close(self):
        if self.webhook is not None:
            await self.webhook.close()
