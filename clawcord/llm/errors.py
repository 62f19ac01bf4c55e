from __future__ import annotations

from dataclasses import dataclass


class CompletionResult:
    """
    Base for every outcome of a completion call.

    `text` is always a non-empty, human-readable string that can be sent
    to Discord as-is. Only `Success` has `ok` set.
    """

    ok = False

    @property
    def text(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Success(CompletionResult):
    content: str

    ok = True

    @property
    def text(self) -> str:
        return self.content


@dataclass(frozen=True)
class MalformedResponse(CompletionResult):
    @property
    def text(self) -> str:
        return "Sorry, I received an unexpected response format from the AI service."


@dataclass(frozen=True)
class HttpError(CompletionResult):
    status: int
    reason: str = ""

    @property
    def text(self) -> str:
        return f"Sorry, the AI service returned an error: {self.status} {self.reason}".rstrip()


@dataclass(frozen=True)
class Unreachable(CompletionResult):
    @property
    def text(self) -> str:
        return "Sorry, I could not reach the AI service. Please check if OpenClaw is running."


@dataclass(frozen=True)
class Unknown(CompletionResult):
    @property
    def text(self) -> str:
        return "Sorry, there was an error processing your request."


def describe_error(error: BaseException) -> str:
    """
    Map a raw exception into a short one-line description for logs.
    """
    s, t = str(error), type(error).__name__
    first_line = s.split(chr(10))[0][:200]
    return f"{t}: {first_line}" if first_line else t
