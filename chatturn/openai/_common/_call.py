from typing import Any, Mapping, Self
from dataclasses import dataclass
from openai.types.chat.chat_completion_message import FunctionCall

__all__ = ["StandardFunctionCall", "AnyFunctionCall"]

type AnyFunctionCall = StandardFunctionCall | FunctionCall | Mapping[str, Any]


@dataclass(slots=True, frozen=True, kw_only=True)
class StandardFunctionCall:
    """
    A common structure to store a function call requested by the model.
    """

    name: str
    arguments: str

    @classmethod
    def from_any_call(cls, call: Self | FunctionCall | Mapping[str, Any]) -> Self:
        if isinstance(call, FunctionCall):
            return cls(name=call.name, arguments=call.arguments)
        if isinstance(call, Mapping):
            return cls(name=call["name"], arguments=call.get("arguments") or "{}")
        return call
