"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from telegram.error import TelegramError

from linkbot.adapters.inbound.http.routes import router
from linkbot.adapters.inbound.telegram.bot import TelegramBotHandlers, build_application
from linkbot.infrastructure import db
from linkbot.infrastructure.config.settings import Settings
from linkbot.infrastructure.logging.logger import logger
from linkbot.infrastructure.wiring.dependencies import (
    create_link_request_flow_use_case,
    create_repositories,
    create_resolve_link_use_case,
)

# Load environment variables from .env file
load_dotenv()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the web application and wire the Telegram bot into its lifespan.

    Args:
        settings: Application settings (read from the environment when omitted)

    Returns:
        FastAPI application
    """
    settings = settings or Settings()

    if settings.repository_backend == "postgres" and settings.database_url:
        db.configure_database(settings.database_url, echo=settings.debug_mode)
    elif not settings.persistence_enabled:
        logger.warning("DATABASE_URL is not set: persistence disabled, running in degraded mode")

    repositories = create_repositories(settings)
    flow_use_case = create_link_request_flow_use_case(settings, repositories)
    resolve_link_use_case = create_resolve_link_use_case(settings, repositories)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.repository_backend == "postgres" and settings.database_url:
            db.init_db()

        bot_application = None
        if settings.bot_enabled:
            handlers = TelegramBotHandlers(flow_use_case, settings.sponsor_link_list)
            bot_application = build_application(settings.bot_token, handlers)
            started = False
            try:
                await bot_application.initialize()
                await bot_application.start()
                started = True
                await bot_application.updater.start_polling()
                logger.info("Bot launched.")
            except TelegramError as e:
                logger.error(f"Startup error: {e!r}")
                # Release the update task and HTTP client; the web server keeps running
                if started:
                    await bot_application.stop()
                await bot_application.shutdown()
                bot_application = None
        else:
            logger.warning("Bot not started: missing BOT_TOKEN")

        yield

        if bot_application is not None:
            await bot_application.updater.stop()
            await bot_application.stop()
            await bot_application.shutdown()

    app = FastAPI(
        title="Link Bot",
        description="Telegram link bot with a link resolution page",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.resolve_link_use_case = resolve_link_use_case
    app.include_router(router)
    return app


def run() -> None:
    """Run the server on the configured port."""
    settings = Settings()
    logger.info(f"Server listening on port {settings.port}")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
