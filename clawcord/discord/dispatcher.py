from __future__ import annotations

import logging

import discord

from clawcord.llm.completion import CompletionClient


MAX_MESSAGE_LENGTH = 2000  # Discord's per-message character limit

EMPTY_PROMPT_REPLY = "❓ Please send a message to chat with me!"
TOO_LONG_REPLY = f"⚠️ Your message is too long. Please keep it under {MAX_MESSAGE_LENGTH} characters."
FAILURE_REPLY = "❌ Sorry, something went wrong while processing your request."


def chunk_text(text: str, max_len: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Split text into contiguous slices of at most max_len characters."""
    return [text[i:i + max_len] for i in range(0, len(text), max_len)]


class MessageDispatcher:
    """
    Relays one inbound Discord message to the completion endpoint and
    replies with the result.

    Handlers share nothing but the completion client, so concurrent
    messages interleave freely.
    """

    def __init__(self, completion_client: CompletionClient):
        self._completion = completion_client

    async def handle(self, message: discord.Message) -> None:
        # Ignore bots, including ourselves
        if message.author.bot:
            return

        prompt = message.content.strip()

        if not prompt:
            await message.reply(EMPTY_PROMPT_REPLY)
            return

        if len(prompt) > MAX_MESSAGE_LENGTH:
            await message.reply(TOO_LONG_REPLY)
            return

        try:
            await message.channel.typing()

            logging.info("New query from %s: %r", message.author, prompt)

            result = await self._completion.complete(prompt)
            reply = result.text

            for chunk in chunk_text(reply):
                await message.reply(chunk)

            logging.info("Response sent (%d chars, ok=%s)", len(reply), result.ok)
        except Exception:  # noqa: BLE001
            logging.exception("Error handling message from %s", message.author)
            try:
                await message.reply(FAILURE_REPLY)
            except Exception as e:  # noqa: BLE001
                logging.warning("Could not send failure reply: %s", e)
