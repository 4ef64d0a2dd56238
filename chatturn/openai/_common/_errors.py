from typing import Sequence
import openai
from ._message import Message
from ._result import FunctionCallResult

__all__ = [
    "ChatTurnError",
    "RemoteCallError",
    "MaxRoundsExceededError",
    "MalformedResponseError",
]


class ChatTurnError(Exception):
    """
    A turn ended without a final reply. `conversation` holds every message up to
    the point of failure, so the caller can retry or resume from it.
    """

    def __init__(
        self,
        message: str,
        conversation: Sequence[Message],
        function_results: Sequence[FunctionCallResult] = (),
    ):
        super().__init__(message)
        self.conversation = list(conversation)
        self.function_results = list(function_results)


class RemoteCallError(ChatTurnError):
    """
    The chat completion request failed. The cause is chained as `__cause__`.
    """


class MaxRoundsExceededError(ChatTurnError):
    """
    The model kept requesting function calls past the configured round limit.
    """


class MalformedResponseError(openai.OpenAIError):
    """
    The API answered, but without any choices to continue the conversation with.
    """
