import asyncio
import logging

import betterlogging as bl
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.fsm.storage.redis import DefaultKeyBuilder, RedisStorage
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web

from tgbot.config import load_config
from tgbot.forms.sessions import FormSessions
from tgbot.handlers import routers_list
from tgbot.middlewares.lead_form import LeadFormMiddleware

logger = logging.getLogger(__name__)


def register_global_middlewares(dp: Dispatcher, sessions: FormSessions):
    """
    Register global middlewares for the given dispatcher.
    Global middlewares here are the ones that are applied to all the handlers (you specify the type of update)

    :param dp: The dispatcher instance.
    :type dp: Dispatcher
    :param sessions: The per-chat lead form controllers.
    :return: None
    """
    middleware_types = [
        LeadFormMiddleware(sessions),
    ]

    for middleware_type in middleware_types:
        dp.message.outer_middleware(middleware_type)
        dp.callback_query.outer_middleware(middleware_type)


def setup_logging():
    """
    Set up logging configuration for the application.

    This method initializes the logging configuration for the application.
    It sets the log level to INFO and configures a basic colorized log for
    output. The log format includes the filename, line number, log level,
    timestamp, logger name, and log message.
    """
    log_level = logging.INFO
    bl.basic_colorized_config(level=log_level)

    logging.basicConfig(
        level=logging.INFO,
        format="%(filename)s:%(lineno)d #%(levelname)-8s [%(asctime)s] - %(name)s - %(message)s",
    )
    logger.info("Starting bot")


def get_storage(config):
    """
    Return storage based on the provided configuration.

    Args:
        config (Config): The configuration object.

    Returns:
        Storage: The storage object based on the configuration.

    """
    if config.tg_bot.use_redis:
        return RedisStorage.from_url(
            config.redis.dsn(),
            key_builder=DefaultKeyBuilder(with_bot_id=True, with_destiny=True),
        )
    else:
        return MemoryStorage()


async def main():
    setup_logging()

    config = load_config(".env")
    storage = get_storage(config)
    sessions = FormSessions.from_config(config)

    bot = Bot(token=config.tg_bot.token)
    dp = Dispatcher(storage=storage)

    dp.include_routers(*routers_list)

    register_global_middlewares(dp, sessions)
    dp.shutdown.register(sessions.close)

    # USE_WEBHOOK=true switches to webhook mode, configured by:
    # WEBHOOK_HOST - Full URL to your server (e.g., https://example.com)
    # WEBHOOK_PATH - Path for webhook (e.g., /webhook)
    # WEBHOOK_PORT - Port to listen on (e.g., 8443, 443, 80, 88)
    if config.webhook.use_webhook:
        webhook_url = f"{config.webhook.host}{config.webhook.path}"
        await bot.set_webhook(url=webhook_url)

        app = web.Application()

        webhook_requests_handler = SimpleRequestHandler(
            dispatcher=dp,
            bot=bot,
        )
        webhook_requests_handler.register(app, path=config.webhook.path)

        setup_application(app, dp, bot=bot)

        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(
            runner,
            host="0.0.0.0",  # Listen on all interfaces
            port=config.webhook.port,
        )

        await site.start()

        logger.info("Webhook mode, bot started on port %s", config.webhook.port)
        try:
            await asyncio.Event().wait()
        finally:
            await runner.cleanup()
    else:
        logger.info("Polling mode, bot started")
        await bot.delete_webhook()
        await dp.start_polling(bot)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.error("Bot was disabled!")
