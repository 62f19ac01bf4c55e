from __future__ import annotations

import asyncio
import logging
from typing import Any

import discord

from clawcord.llm.errors import describe_error


def log_client_error(event_method: str, error: BaseException | None = None) -> None:
    """
    Standard handler for exceptions escaping a Discord event handler.

    The client keeps running afterwards.
    """
    if error is not None:
        logging.error(
            "Discord client error in %s: %s",
            event_method,
            describe_error(error),
            exc_info=error,
        )
    else:
        logging.exception("Discord client error in %s", event_method)


def log_unhandled_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """
    asyncio loop exception handler for tasks nobody awaited.

    Logs and returns, so the loop (and the bot) keep going.
    """
    error = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if error is not None:
        logging.error("Unhandled async error: %s (%s)", message, describe_error(error), exc_info=error)
    else:
        logging.error("Unhandled async error: %s", message)


async def shutdown(discord_bot: discord.Client) -> None:
    """Close the gateway connection. Safe to call more than once."""
    logging.info("Shutting down bot...")
    if not discord_bot.is_closed():
        await discord_bot.close()
