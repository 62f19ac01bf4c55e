import unittest
from unittest.mock import AsyncMock, MagicMock

from clawcord.discord.dispatcher import (
    EMPTY_PROMPT_REPLY,
    FAILURE_REPLY,
    MAX_MESSAGE_LENGTH,
    TOO_LONG_REPLY,
    MessageDispatcher,
    chunk_text,
)
from clawcord.llm.errors import HttpError, Success, Unreachable


def make_message(content, is_bot=False):
    message = MagicMock()
    message.author.bot = is_bot
    message.author.__str__.return_value = "tester#0001"
    message.content = content
    message.reply = AsyncMock()
    message.channel.typing = AsyncMock()
    return message


def make_dispatcher(result=None, side_effect=None):
    completion = MagicMock()
    completion.complete = AsyncMock(return_value=result, side_effect=side_effect)
    return MessageDispatcher(completion), completion


def sent_replies(message):
    return [c.args[0] for c in message.reply.await_args_list]


class TestChunkText(unittest.TestCase):
    def test_short_text_is_one_chunk(self):
        self.assertEqual(chunk_text("hello"), ["hello"])
        self.assertEqual(chunk_text("x" * MAX_MESSAGE_LENGTH), ["x" * MAX_MESSAGE_LENGTH])

    def test_long_text_partition(self):
        for length in (2001, 4000, 4001, 9999):
            with self.subTest(length=length):
                text = "".join(chr(97 + i % 26) for i in range(length))
                chunks = chunk_text(text)
                self.assertEqual(len(chunks), -(-length // MAX_MESSAGE_LENGTH))
                self.assertTrue(all(len(c) <= MAX_MESSAGE_LENGTH for c in chunks))
                self.assertEqual("".join(chunks), text)

    def test_chunking_keeps_newlines(self):
        text = ("line\n" * 1000).rstrip()
        self.assertEqual("".join(chunk_text(text)), text)


class TestMessageDispatcher(unittest.IsolatedAsyncioTestCase):
    async def test_ignores_bots(self):
        dispatcher, completion = make_dispatcher(Success("hi"))
        message = make_message("hello", is_bot=True)

        await dispatcher.handle(message)

        message.reply.assert_not_awaited()
        message.channel.typing.assert_not_awaited()
        completion.complete.assert_not_awaited()

    async def test_empty_prompt(self):
        for content in ("", "   ", "\n\t "):
            with self.subTest(content=content):
                dispatcher, completion = make_dispatcher(Success("hi"))
                message = make_message(content)

                await dispatcher.handle(message)

                self.assertEqual(sent_replies(message), [EMPTY_PROMPT_REPLY])
                completion.complete.assert_not_awaited()

    async def test_too_long_prompt(self):
        dispatcher, completion = make_dispatcher(Success("hi"))
        message = make_message("a" * (MAX_MESSAGE_LENGTH + 1))

        await dispatcher.handle(message)

        self.assertEqual(sent_replies(message), [TOO_LONG_REPLY])
        completion.complete.assert_not_awaited()

    async def test_prompt_at_limit_is_sent_trimmed(self):
        prompt = "a" * MAX_MESSAGE_LENGTH
        dispatcher, completion = make_dispatcher(Success("ok"))
        message = make_message(f"  {prompt}  ")

        await dispatcher.handle(message)

        completion.complete.assert_awaited_once_with(prompt)
        message.channel.typing.assert_awaited_once()
        self.assertEqual(sent_replies(message), ["ok"])

    async def test_long_result_is_chunked_in_order(self):
        result = "".join(chr(65 + i % 26) for i in range(4500))
        dispatcher, _ = make_dispatcher(Success(result))
        message = make_message("tell me a story")

        await dispatcher.handle(message)

        replies = sent_replies(message)
        self.assertEqual(len(replies), 3)
        self.assertEqual([len(r) for r in replies], [2000, 2000, 500])
        self.assertEqual("".join(replies), result)

    async def test_failure_result_is_relayed(self):
        for result in (HttpError(503, "Service Unavailable"), Unreachable()):
            with self.subTest(result=result):
                dispatcher, _ = make_dispatcher(result)
                message = make_message("hello")

                await dispatcher.handle(message)

                self.assertEqual(sent_replies(message), [result.text])

    async def test_unexpected_error_gives_one_generic_reply(self):
        dispatcher, _ = make_dispatcher(side_effect=RuntimeError("boom"))
        message = make_message("hello")

        with self.assertLogs(level="ERROR"):
            await dispatcher.handle(message)

        self.assertEqual(sent_replies(message), [FAILURE_REPLY])

    async def test_typing_failure_is_contained(self):
        dispatcher, completion = make_dispatcher(Success("hi"))
        message = make_message("hello")
        message.channel.typing.side_effect = RuntimeError("forbidden")

        with self.assertLogs(level="ERROR"):
            await dispatcher.handle(message)

        completion.complete.assert_not_awaited()
        self.assertEqual(sent_replies(message), [FAILURE_REPLY])

    async def test_failed_fallback_reply_does_not_raise(self):
        dispatcher, _ = make_dispatcher(Success("hi"))
        message = make_message("hello")
        message.reply.side_effect = RuntimeError("cannot send")

        with self.assertLogs(level="WARNING") as logs:
            await dispatcher.handle(message)

        self.assertEqual(message.reply.await_count, 2)
        self.assertIn("Could not send failure reply", "\n".join(logs.output))


if __name__ == "__main__":
    unittest.main()
