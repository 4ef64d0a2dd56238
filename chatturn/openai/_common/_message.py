from typing import Literal, Self
from pydantic import BaseModel, ConfigDict
from openai.types.chat import ChatCompletionMessage, ChatCompletionMessageParam
from ._call import StandardFunctionCall

__all__ = [
    "Role",
    "Message",
    "system_message",
    "user_message",
    "assistant_message",
    "function_message",
]

type Role = Literal["system", "user", "assistant", "function"]


class Message(BaseModel):
    """
    One entry in a conversation. Immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str | None = None
    name: str | None = None
    """Name of the function that produced the content, on role='function'."""
    function_call: StandardFunctionCall | None = None
    """Function the model asked us to run, on role='assistant'."""

    def to_param(self) -> ChatCompletionMessageParam:
        """
        Message param for the `messages` array in the Chat Completions API.
        """
        if self.role == "function":
            return {"role": "function", "name": self.name or "", "content": self.content}
        if self.role == "assistant":
            param: ChatCompletionMessageParam = {
                "role": "assistant",
                "content": self.content,
            }
            if (call := self.function_call) is not None:
                param["function_call"] = {"name": call.name, "arguments": call.arguments}
            if self.name:
                param["name"] = self.name
            return param

        param = {"role": self.role, "content": self.content or ""}
        if self.name:
            param["name"] = self.name
        return param  # pyright: ignore[reportReturnType]

    @classmethod
    def from_openai(cls, message: ChatCompletionMessage) -> Self:
        call = message.function_call
        return cls(
            role="assistant",
            content=message.content,
            function_call=call and StandardFunctionCall.from_any_call(call),
        )


def system_message(content: str) -> Message:
    return Message(role="system", content=content)


def user_message(content: str) -> Message:
    return Message(role="user", content=content)


def assistant_message(
    content: str | None, function_call: StandardFunctionCall | None = None
) -> Message:
    return Message(role="assistant", content=content, function_call=function_call)


def function_message(name: str, content: str) -> Message:
    return Message(role="function", name=name, content=content)
