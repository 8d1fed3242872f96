import asyncio

import pytest

from infrastructure.sheets.api import WEBHOOK_FAILURE_MESSAGE, WebhookError
from tgbot.forms.controller import (
    LeadFormController,
    SubmissionStatus,
    UnknownFieldError,
    UnknownOptionError,
    default_values,
    toggle_option,
)


def _filled(controller, values):
    for name, value in values.items():
        controller.values[name] = value
    return controller


def test_fresh_controller_has_documented_defaults():
    controller = LeadFormController()

    assert controller.values["accepts_beta_program"] == "Sim"
    assert controller.values["consent_given"] is False
    assert controller.values["goals"] == []
    assert controller.values["name"] == ""
    assert controller.errors == {}
    assert controller.state.status is SubmissionStatus.IDLE
    assert controller.submitting is False


def test_toggle_option_adds_and_removes():
    assert toggle_option([], "a") == ["a"]
    assert toggle_option(["a", "b"], "c") == ["a", "b", "c"]
    assert toggle_option(["a", "b", "c"], "b") == ["a", "c"]


def test_toggling_twice_restores_the_selection():
    selected = ["App Mobile", "Fiscal & Financeiro"]

    once = toggle_option(selected, "Cooperados / CRM")
    twice = toggle_option(once, "Cooperados / CRM")

    assert twice == selected
    assert toggle_option(toggle_option(selected, "App Mobile"), "App Mobile") == [
        "Fiscal & Financeiro",
        "App Mobile",
    ]


def test_controller_toggle_revalidates_the_field():
    controller = LeadFormController()

    controller.toggle("goals", "Relatórios automáticos")
    assert "goals" not in controller.errors

    controller.toggle("goals", "Relatórios automáticos")
    assert controller.values["goals"] == []
    assert controller.errors["goals"] == "Selecione ao menos um objetivo"


def test_mutators_reject_values_outside_the_vocabulary():
    controller = LeadFormController()

    with pytest.raises(UnknownOptionError):
        controller.toggle("goals", "Dominar o mundo")
    with pytest.raises(UnknownOptionError):
        controller.set_value("sector", "Mineração")
    with pytest.raises(UnknownOptionError):
        controller.set_value("modules_of_interest", ["App Mobile", "Blockchain"])
    with pytest.raises(UnknownFieldError):
        controller.set_value("favorite_color", "verde")
    with pytest.raises(UnknownFieldError):
        controller.toggle("sector", "Leite")


def test_set_value_on_multi_select_drops_duplicates():
    controller = LeadFormController()
    controller.set_value("modules_of_interest", ["App Mobile", "App Mobile"])
    assert controller.values["modules_of_interest"] == ["App Mobile"]


def test_set_value_clears_an_error_once_fixed():
    controller = LeadFormController()
    controller.errors["name"] = "Informe seu nome"

    controller.set_value("name", "Ana Silva")

    assert "name" not in controller.errors


@pytest.mark.asyncio
async def test_invalid_form_never_reaches_the_webhook(fake_webhook, valid_form):
    valid_form["previous_attempts"] = "Nada"
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    accepted = await controller.submit()

    assert accepted is False
    assert fake_webhook.calls == []
    assert controller.errors == {"previous_attempts": "Conte um pouco do que já tentou"}
    assert controller.state.status is SubmissionStatus.IDLE


@pytest.mark.asyncio
async def test_missing_consent_blocks_submission(fake_webhook, valid_form):
    valid_form["consent_given"] = False
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    assert await controller.submit() is False
    assert fake_webhook.calls == []
    assert set(controller.errors) == {"consent_given"}


@pytest.mark.asyncio
async def test_successful_submission_resets_the_form(fake_webhook, valid_form):
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    accepted = await controller.submit()

    assert accepted is True
    assert len(fake_webhook.calls) == 1
    pairs = fake_webhook.calls[0]
    assert ("name", "Ana Silva") in pairs
    assert ("goals", "Relatórios automáticos") in pairs
    assert controller.values == default_values()
    assert controller.errors == {}
    assert controller.state.status is SubmissionStatus.SUBMITTED
    assert controller.submitting is False


@pytest.mark.asyncio
async def test_non_2xx_keeps_values_and_reports_error(fake_webhook, valid_form):
    fake_webhook.error = WebhookError(500)
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)
    before = dict(controller.values)

    accepted = await controller.submit()

    assert accepted is False
    assert controller.state.status is SubmissionStatus.ERROR
    assert controller.state.message == WEBHOOK_FAILURE_MESSAGE
    assert controller.values == before
    assert controller.submitting is False


@pytest.mark.asyncio
async def test_transport_error_uses_its_message(fake_webhook, valid_form):
    fake_webhook.error = ConnectionError("Cannot connect to host")
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    await controller.submit()

    assert controller.state.status is SubmissionStatus.ERROR
    assert controller.state.message == "Cannot connect to host"


@pytest.mark.asyncio
async def test_error_without_message_falls_back(fake_webhook, valid_form):
    fake_webhook.error = asyncio.TimeoutError()
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    await controller.submit()

    assert controller.state.message == WEBHOOK_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_failed_submission_can_be_retried(fake_webhook, valid_form):
    fake_webhook.error = WebhookError(502)
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    assert await controller.submit() is False
    fake_webhook.error = None
    assert await controller.submit() is True

    assert len(fake_webhook.calls) == 2
    assert controller.state.status is SubmissionStatus.SUBMITTED


@pytest.mark.asyncio
async def test_second_submit_while_in_flight_is_ignored(fake_webhook, valid_form):
    fake_webhook.release = asyncio.Event()
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    first = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    assert controller.submitting is True
    assert controller.state.status is SubmissionStatus.SUBMITTING

    assert await controller.submit() is False
    assert len(fake_webhook.calls) == 1

    fake_webhook.release.set()
    assert await first is True
    assert controller.submitting is False
    assert len(fake_webhook.calls) == 1


@pytest.mark.asyncio
async def test_in_flight_flag_is_released_after_failure(fake_webhook, valid_form):
    fake_webhook.release = asyncio.Event()
    fake_webhook.error = WebhookError(500)
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    task = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    assert controller.submitting is True
    fake_webhook.release.set()
    await task

    assert controller.submitting is False


@pytest.mark.asyncio
async def test_without_endpoint_submission_is_a_local_success(valid_form):
    controller = _filled(LeadFormController(webhook=None), valid_form)

    assert await controller.submit() is True
    assert controller.state.status is SubmissionStatus.SUBMITTED
    assert controller.values == default_values()


def test_reset_restores_defaults(valid_form):
    controller = _filled(LeadFormController(), valid_form)
    controller.errors["name"] = "x"

    controller.reset()

    assert controller.values == default_values()
    assert controller.errors == {}
    assert controller.state.status is SubmissionStatus.IDLE


@pytest.mark.asyncio
async def test_reset_is_refused_while_in_flight(fake_webhook, valid_form):
    fake_webhook.release = asyncio.Event()
    fake_webhook.error = WebhookError(500)
    controller = _filled(LeadFormController(webhook=fake_webhook), valid_form)

    task = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    assert controller.reset() is False
    assert controller.values["name"] == "Ana Silva"

    fake_webhook.release.set()
    assert await task is False

    assert controller.state.status is SubmissionStatus.ERROR
    assert controller.values == valid_form
    assert controller.reset() is True
    assert controller.values == default_values()
