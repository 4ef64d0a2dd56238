# File generated from its async equivalent, chatturn/openai/aio/_transport.py
from typing import Protocol
import logging
from openai import OpenAI
from .._common import ChatRequest, ChatResponse, MalformedResponseError

__all__ = ["ChatTransport", "OpenAITransport"]

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    """
    Anything that can send a chat completion request and return its response.
    Failures must be raised as `openai.OpenAIError`.
    """

    def send(self, request: ChatRequest) -> ChatResponse: ...


class OpenAITransport:
    """
    Sends requests through the Chat Completions API of an OpenAI client.
    """

    def __init__(self, client: OpenAI):
        self.client = client

    def send(self, request: ChatRequest) -> ChatResponse:
        kwargs = request.to_openai_kwargs()
        logger.debug(
            "Requesting chat completion: model=%s, messages=%d, functions=%d",
            request.model,
            len(request.messages),
            len(request.functions),
        )
        completion = self.client.chat.completions.create(**kwargs)
        if not completion.choices:
            raise MalformedResponseError(
                f"Chat completion {completion.id!r} contained no choices"
            )
        return ChatResponse.from_openai(completion)
