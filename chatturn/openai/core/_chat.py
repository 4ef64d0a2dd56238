# File generated from its async equivalent, chatturn/openai/aio/_chat.py
from typing import Self, Sequence
from dataclasses import dataclass, field
import logging
import openai
from openai import OpenAI
from ._group import FunctionGroup
from ._transport import ChatTransport, OpenAITransport
from .._common import (
    ChatConfig,
    ChatRequest,
    ChatSettings,
    Message,
    FunctionCallResult,
    FunctionCallFailure,
    RemoteCallError,
    MaxRoundsExceededError,
)

__all__ = ["Chat", "TurnResult"]

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True, kw_only=True)
class TurnResult:
    """
    Outcome of a completed turn.
    """

    conversation: list[Message]
    """The input conversation, extended with every message of this turn."""
    function_results: list[FunctionCallResult] = field(default_factory=list)
    """Every function call handled during the turn, in order."""
    rounds: int
    """Number of API calls made."""

    @property
    def reply(self) -> Message:
        """The model's final message."""
        return self.conversation[-1]

    @property
    def failures(self) -> list[FunctionCallFailure]:
        return [r for r in self.function_results if r.fail_reason is not None]


class Chat:
    """
    A chat client that runs whole turns: it keeps requesting completions and
    running the functions the model asks for, until the model replies with a
    plain message.
    """

    def __init__(
        self,
        config: ChatConfig,
        functions: FunctionGroup | None = None,
        transport: ChatTransport | None = None,
    ):
        self.config = config
        self.functions = functions if functions is not None else FunctionGroup()
        self.transport = transport or OpenAITransport(OpenAI())

    @classmethod
    def new(cls, api_key: str, model: str) -> Self:
        """
        Create a client for `model`, authenticated with `api_key`.
        """
        client = OpenAI(api_key=api_key)
        return cls(ChatConfig(model=model), transport=OpenAITransport(client))

    @classmethod
    def from_settings(cls, settings: ChatSettings | None = None) -> Self:
        """
        Create a client from environment settings. See `ChatSettings`.
        """
        settings = settings or ChatSettings()  # pyright: ignore[reportCallIssue]
        client = OpenAI(api_key=settings.api_key, base_url=settings.base_url)
        return cls(settings.chat_config(), transport=OpenAITransport(client))

    def take_turn(self, conversation: Sequence[Message]) -> TurnResult:
        """
        Request replies until the model finishes its turn, running any function
        calls along the way. The given conversation is left untouched.
        """
        conversation = list(conversation)
        results: list[FunctionCallResult] = []
        max_rounds = self.config.max_rounds

        for n in range(1, max_rounds + 1):
            # 1. Request an LLM response, and append it to the conversation.

            request = ChatRequest.build(
                conversation, self.config, self.functions.standard_definitions()
            )
            logger.debug("Turn round %d/%d", n, max_rounds)
            try:
                response = self.transport.send(request)
            except openai.OpenAIError as e:
                logger.warning("Chat completion failed in round %d: %s", n, e)
                raise RemoteCallError(
                    f"Chat completion failed: {e}",
                    conversation=conversation,
                    function_results=results,
                ) from e
            message = response.message
            conversation.append(message)

            # 2. If there wasn't a function call: we're done, and can finish this turn.

            if (call := message.function_call) is None:
                return TurnResult(
                    conversation=conversation, function_results=results, rounds=n
                )

            # 3. Otherwise run it, and answer it in the conversation, so the LLM can
            #    continue its turn.

            result = self.functions.run_function_call(call)
            results.append(result)
            conversation.append(result.function_message)

        logger.warning("Turn stopped after %d rounds of function calls", max_rounds)
        raise MaxRoundsExceededError(
            f"Model was still calling functions after {max_rounds} rounds",
            conversation=conversation,
            function_results=results,
        )

    def chat(self, conversation: Sequence[Message]) -> list[Message]:
        """
        Take a turn, and return the extended conversation.
        """
        result = self.take_turn(conversation)
        return result.conversation
