# File generated from its async equivalent, chatturn/openai/aio/_group.py
from typing import Any, Callable, Sequence
import logging
from openai.types.chat.completion_create_params import Function
from ._function import BaseFunctionModel
from .._common import (
    StandardFunctionCall,
    StandardFunctionDefinition,
    AnyFunctionCall,
    FunctionCallResult,
    FunctionCallFailure,
    FunctionNotFoundError,
)

__all__ = ["FunctionGroup"]

logger = logging.getLogger(__name__)


class FunctionGroup(dict[str, type[BaseFunctionModel]]):
    """
    The functions the model is allowed to call, keyed by function name, enabling
    automatic dispatching of function calls.
    """

    @classmethod
    def from_list(
        cls, functions: Sequence[type[BaseFunctionModel] | Callable[..., Any]]
    ) -> "FunctionGroup":
        """
        Create from a list of function model classes and/or plain functions.
        """
        group = cls()
        for function in functions:
            group.add_function(function)
        if len(group) != len(functions):
            raise ValueError(
                f"Cannot create {cls.__name__}: duplicate function names in {functions}"
            )
        return group

    def add_function[F: type[BaseFunctionModel] | Callable[..., Any]](
        self, function: F
    ) -> F:
        """
        Register a function model class or a plain function. Can either be used
        alone, or as a decorator. The decorated object is returned unchanged.
        """
        if isinstance(function, type) and issubclass(function, BaseFunctionModel):
            model = function
        else:
            model = BaseFunctionModel.model_function_from_callable(function)
        self[model.model_function_name()] = model
        return function

    def run_function_call(self, call: AnyFunctionCall) -> FunctionCallResult:
        """
        Dispatch a function call to the function with a matching name.
        """
        call = StandardFunctionCall.from_any_call(call)
        if function := self.get(call.name):
            logger.info("Calling function `%s`", call.name)
            return function.model_function_run_call(call)

        logger.warning("Model requested unknown function `%s`", call.name)
        exception = FunctionNotFoundError(call.name)
        return FunctionCallFailure(
            name=call.name,
            result_content=str(exception),
            fail_reason="invalid_name",
            exception=exception,
        )

    def standard_definitions(self) -> list[StandardFunctionDefinition]:
        return [f.model_function_standard_definition() for f in self.values()]

    def function_definitions(self) -> list[Function]:
        """
        Function definitions for the `functions` array parameter in the API.
        """
        return [f.model_function_definition() for f in self.values()]

    def __contains__(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, item: str | type[BaseFunctionModel] | Callable[..., Any]
    ) -> bool:
        if isinstance(item, type) and issubclass(item, BaseFunctionModel):
            item = item.model_function_name()
        elif not isinstance(item, str):
            # Plain functions are registered under their own name.
            item = getattr(item, "__name__", None)
        return super().__contains__(item)
