from typing import Any, Self, Sequence
from pydantic import BaseModel
from openai.types.chat import ChatCompletion
from ._config import ChatConfig, FunctionCallPolicy
from ._definition import StandardFunctionDefinition
from ._message import Message

__all__ = ["ChatRequest", "ChatResponse"]


class ChatRequest(BaseModel):
    """
    Everything sent to the API for a single chat completion.
    """

    model: str
    messages: list[Message]
    functions: list[StandardFunctionDefinition] = []
    function_call: FunctionCallPolicy | None = None
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stop: list[str] | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logit_bias: dict[str, int] | None = None
    user: str | None = None
    timeout: float | None = None

    @classmethod
    def build(
        cls,
        conversation: Sequence[Message],
        config: ChatConfig,
        functions: Sequence[StandardFunctionDefinition] = (),
    ) -> Self:
        return cls(
            model=config.model,
            messages=list(conversation),
            functions=list(functions),
            function_call=config.function_call,
            timeout=config.timeout,
            **config.generation_params(),
        )

    def to_openai_kwargs(self) -> dict[str, Any]:
        """
        Keyword arguments for `client.chat.completions.create()`.
        """
        kwargs = self.model_dump(
            exclude={"messages", "functions", "function_call"}, exclude_none=True
        )
        kwargs["messages"] = [m.to_param() for m in self.messages]

        # The API rejects `function_call` unless `functions` is non-empty.
        if self.functions:
            kwargs["functions"] = [
                f.function_def_for_chat_completions_api() for f in self.functions
            ]
            if (policy := self.function_call) is not None:
                is_mode = policy in ("auto", "none")
                kwargs["function_call"] = policy if is_mode else {"name": policy}
        return kwargs


class ChatResponse(BaseModel):
    """
    The candidate messages of a chat completion, in order.
    """

    id: str = ""
    model: str = ""
    messages: list[Message]

    @property
    def message(self) -> Message:
        """The first candidate, which is the one we continue the conversation with."""
        return self.messages[0]

    @classmethod
    def from_openai(cls, completion: ChatCompletion) -> Self:
        return cls(
            id=completion.id,
            model=completion.model,
            messages=[Message.from_openai(c.message) for c in completion.choices],
        )
