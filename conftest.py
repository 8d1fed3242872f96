"""
Pytest configuration and fixtures for the CoopHub lead bot tests
"""

import pytest

from tgbot.forms.controller import default_values


@pytest.fixture
def valid_form():
    """A form that passes every rule, as filled in by a real lead."""
    values = default_values()
    values.update(
        {
            "name": "Ana Silva",
            "email": "ana@exemplo.com",
            "organization_size": "Média (300–1000)",
            "sector": "Grãos",
            "implementation_timeline": "1–3 meses",
            "accepts_beta_program": "Sim",
            "price_range": "R$ 100–199/mês",
            "goals": ["Relatórios automáticos"],
            "pain_points": ["Retrabalho e planilhas paralelas"],
            "modules_of_interest": ["Fiscal & Financeiro"],
            "previous_attempts": "Usamos planilhas e deu erro.",
            "consent_given": True,
        }
    )
    return values


class FakeWebhook:
    """Records posted leads; can block until released or fail on demand."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[list[tuple[str, str]]] = []
        self.release = None

    async def post_lead(self, pairs):
        self.calls.append(list(pairs))
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return 200, {"result": "success"}


@pytest.fixture
def fake_webhook():
    return FakeWebhook()
