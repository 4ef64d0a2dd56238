from typing import Annotated, Any, Literal
from dataclasses import dataclass
import pydantic
import pydantic_core
from ._message import Message, function_message

__all__ = [
    "ErrorForLLMToSee",
    "FunctionNotFoundError",
    "FunctionCallFailReason",
    "FunctionCallSuccess",
    "FunctionCallFailure",
    "FunctionCallResult",
    "format_result_content",
]


class ErrorForLLMToSee(Exception):
    """
    Raise one of these in your handler, and it will automatically be stringified
    and placed in the function result message.
    """

    pass


class FunctionNotFoundError(ErrorForLLMToSee):
    """
    The model requested a function that isn't registered.
    """

    def __init__(self, name: str):
        super().__init__(f"Function `{name}` not found.")
        self.name = name


type FunctionCallFailReason = Literal[
    "invalid_name", "invalid_arguments", "explicit_handler_error"
]


def format_result_content(value: Any) -> str:
    """
    Text representation of a handler's return value, for the function message.
    Strings are used as-is. Anything else is dumped as JSON, and values JSON cannot
    represent are dumped as the JSON string of their `str()`.
    """
    if isinstance(value, str):
        return value
    return pydantic_core.to_json(value, fallback=str).decode()


@dataclass(slots=True, frozen=True, kw_only=True)
class _BaseFunctionCallResult:
    name: str
    result_content: str

    @property
    def function_message(self) -> Message:
        """
        A role='function' message carrying the result back to the model.
        """
        return function_message(self.name, self.result_content)


@dataclass(slots=True, frozen=True, kw_only=True)
class FunctionCallSuccess(_BaseFunctionCallResult):
    """
    Result of handling a function call successfully. Includes the raw value.
    """

    name: str
    result_content: str
    fail_reason: None = None
    exception: None = None
    value: Any


@dataclass(slots=True, frozen=True, kw_only=True)
class FunctionCallFailure(_BaseFunctionCallResult):
    """
    Result of handling a function call unsuccessfully.
    """

    name: str
    result_content: str
    fail_reason: FunctionCallFailReason
    exception: pydantic.ValidationError | ErrorForLLMToSee
    value: None = None


type FunctionCallResult = Annotated[
    FunctionCallSuccess | FunctionCallFailure, pydantic.Discriminator("fail_reason")
]
