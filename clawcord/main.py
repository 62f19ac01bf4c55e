"""
Entrypoint for the Discord to OpenClaw relay bot.

Run with `python -m clawcord` or the `clawcord` console script.
"""

import asyncio
import logging
import os
import signal
import sys

import discord
import httpx

from clawcord.config.loader import Settings, get_config
from clawcord.discord.client import build_discord_bot
from clawcord.discord.dispatcher import MessageDispatcher
from clawcord.discord.errors import log_unhandled_exception, shutdown
from clawcord.llm.completion import CompletionClient


def setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s: %(message)s")
    if level == logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.DEBUG)
    else:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)


async def run_bot(config: Settings) -> None:
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(log_unhandled_exception)

    async with httpx.AsyncClient(timeout=config.request_timeout) as http_client:
        dispatcher = MessageDispatcher(CompletionClient(config, http_client))
        discord_bot = build_discord_bot(config, dispatcher)

        shutdown_tasks: list[asyncio.Task] = []

        def on_sigint() -> None:
            shutdown_tasks.append(loop.create_task(shutdown(discord_bot)))

        try:
            loop.add_signal_handler(signal.SIGINT, on_sigint)
        except NotImplementedError:
            pass  # Windows: KeyboardInterrupt is handled in main()

        async with discord_bot:
            try:
                await discord_bot.start(config.discord_token)
            except discord.LoginFailure as e:
                logging.error("Failed to login to Discord: %s", e)
                sys.exit(1)


def main() -> None:
    setup_logging()
    logging.info("Starting Discord-OpenClaw Bot...")
    config = get_config()
    try:
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        logging.info("Shutting down bot...")
    sys.exit(0)


if __name__ == "__main__":
    main()
