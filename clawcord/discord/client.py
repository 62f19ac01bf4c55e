from __future__ import annotations

import logging
from typing import Any

import discord
from discord.ext import commands

from clawcord.config.loader import Settings
from .dispatcher import MessageDispatcher
from .errors import log_client_error


def build_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


def build_discord_bot(settings: Settings, dispatcher: MessageDispatcher) -> commands.Bot:
    """
    Create the gateway client and wire its events to the dispatcher.

    The prefix is handed to commands.Bot but no commands are registered and
    on_message never calls process_commands, so every message is relayed.
    """
    discord_bot = commands.Bot(
        intents=build_intents(),
        command_prefix=settings.bot_prefix,
        help_command=None,
    )

    @discord_bot.event
    async def on_ready() -> None:
        user = discord_bot.user
        logging.info("Bot is online!")
        logging.info("Logged in as: %s", user)
        logging.info("Bot ID: %s", getattr(user, "id", "unknown"))
        logging.info("Connected to %d server(s)", len(discord_bot.guilds))
        logging.info("Listening for messages (prefix %r reserved, not required)", settings.bot_prefix)

    @discord_bot.event
    async def on_message(new_msg: discord.Message) -> None:
        await dispatcher.handle(new_msg)

    @discord_bot.event
    async def on_error(event_method: str, *args: Any, **kwargs: Any) -> None:
        log_client_error(event_method)

    return discord_bot
