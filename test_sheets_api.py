import pytest
import pytest_asyncio
from aiohttp import ClientError, test_utils, web

from infrastructure.sheets.api import FORM_CONTENT_TYPE, SheetsWebhook, WebhookError
from tgbot.forms.controller import LeadFormController, SubmissionStatus


class SheetScript:
    """Stands in for the Apps Script endpoint and records what it receives."""

    def __init__(self):
        self.status = 200
        self.requests = []

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            {
                "method": request.method,
                "content_type": request.headers.get("Content-Type"),
                "body": await request.text(),
                "form": await request.post(),
            }
        )
        return web.json_response({"result": "success"}, status=self.status)


@pytest_asyncio.fixture
async def sheet_script():
    script = SheetScript()
    app = web.Application()
    app.router.add_post("/exec", script.handle)
    server = test_utils.TestServer(app)
    await server.start_server()
    script.url = str(server.make_url("/exec"))
    yield script
    await server.close()


@pytest.mark.asyncio
async def test_post_lead_sends_form_encoded_pairs(sheet_script):
    pairs = [("nome", "Ana Silva"), ("email", "ana@exemplo.com"), ("objetivos", "A"), ("objetivos", "B")]

    async with SheetsWebhook(sheet_script.url) as webhook:
        status, result = await webhook.post_lead(pairs)

    assert status == 200
    assert result == {"result": "success"}
    received = sheet_script.requests[0]
    assert received["method"] == "POST"
    assert received["content_type"] == FORM_CONTENT_TYPE
    assert received["body"] == "nome=Ana+Silva&email=ana%40exemplo.com&objetivos=A&objetivos=B"
    assert received["form"].getall("objetivos") == ["A", "B"]


@pytest.mark.asyncio
async def test_non_2xx_raises_webhook_error(sheet_script):
    sheet_script.status = 500

    async with SheetsWebhook(sheet_script.url) as webhook:
        with pytest.raises(WebhookError) as exc:
            await webhook.post_lead([("name", "Ana Silva")])

    assert exc.value.status == 500
    assert str(exc.value) == "Falha no webhook do Sheets"


@pytest.mark.asyncio
async def test_controller_posts_the_lead_through_the_client(sheet_script, valid_form):
    valid_form["goals"] = ["Relatórios automáticos", "Processos mais rápidos"]
    async with SheetsWebhook(sheet_script.url) as webhook:
        controller = LeadFormController(webhook=webhook)
        controller.values.update(valid_form)

        assert await controller.submit() is True

    body = sheet_script.requests[0]["body"]
    assert body.startswith("nome=Ana+Silva&")
    assert "&name=Ana+Silva&" in body
    assert "email=ana%40exemplo.com" in body
    assert body.count("objetivos=") == 2
    for key in ("setorOutro", "objetivoOutro", "problemaOutro", "integracoes", "problemasLivre"):
        assert f"{key}=" not in body
    form = sheet_script.requests[0]["form"]
    assert form["_source"] == "Landing CoopHub"
    assert form["consent"] == "true"


@pytest.mark.asyncio
async def test_controller_keeps_values_when_the_sheet_rejects(sheet_script, valid_form):
    sheet_script.status = 403
    async with SheetsWebhook(sheet_script.url) as webhook:
        controller = LeadFormController(webhook=webhook)
        controller.values.update(valid_form)

        assert await controller.submit() is False

    assert controller.state.status is SubmissionStatus.ERROR
    assert controller.state.message == "Falha no webhook do Sheets"
    assert controller.values["name"] == "Ana Silva"


@pytest.mark.asyncio
async def test_unreachable_endpoint_raises_client_error():
    app = web.Application()
    server = test_utils.TestServer(app)
    await server.start_server()
    url = str(server.make_url("/exec"))
    await server.close()

    async with SheetsWebhook(url) as webhook:
        with pytest.raises(ClientError):
            await webhook.post_lead([("name", "Ana Silva")])
