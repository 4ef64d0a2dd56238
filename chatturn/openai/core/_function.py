# File generated from its async equivalent, chatturn/openai/aio/_function.py
from typing import Any, Callable, ClassVar
from textwrap import dedent
import inspect
import logging
import pydantic
from openai.types.chat.completion_create_params import Function
from .._common import (
    CallableSignature,
    StandardFunctionDefinition,
    AnyFunctionCall,
    StandardFunctionCall,
    FunctionCallResult,
    FunctionCallSuccess,
    FunctionCallFailure,
    ErrorForLLMToSee,
    format_result_content,
)

__all__ = ["BaseFunctionModel"]

logger = logging.getLogger(__name__)


class BaseFunctionModel(pydantic.BaseModel):
    """
    Pydantic BaseModel for defining a function the model may call, and handling
    calls to it. The model fields are the function's parameters.
    """

    model_config = pydantic.ConfigDict(use_attribute_docstrings=True)

    # Things for subclasses to customize/override
    # ----------------------------------------------------------------------------------

    model_function_custom_name: ClassVar[str | None] = None
    """
    Class config: Use a custom name, instead of the class name, for the function
    definition. This takes precedence over the name generator, if one is set.
    """

    model_function_name_generator: ClassVar[Callable[[str], str] | None] = None
    """
    Class config: Function to generate a function name from the class name.
    """

    model_function_custom_description: ClassVar[str | None] = None
    """
    Class config: Custom description to use instead of the class docstring.
    """

    model_function_custom_json_schema: ClassVar[dict[str, Any] | None] = None
    """
    Class config: Use a custom JSON schema instead of letting Pydantic generate one.
    """

    def model_function_handler(self) -> Any:
        """
        Subclasses should override this with the handling logic for the function.
        The return value is stringified for the function result message.
        """
        raise NotImplementedError(f"{type(self).__name__}.model_function_handler()")

    @classmethod
    def model_function_json_schema(cls) -> dict[str, Any]:
        """
        Get the JSON schema to be used in the function definition.
        """
        return cls.model_function_custom_json_schema or cls.model_json_schema()

    # Things to be used, not overridden
    # ----------------------------------------------------------------------------------

    @classmethod
    def model_function_name(cls) -> str:
        """
        Name of the function.
        Order of priority: Custom name, name generator, class name.
        """
        custom = cls.model_function_custom_name
        generate = cls.model_function_name_generator
        return custom or (generate and generate(cls.__name__)) or cls.__name__

    @classmethod
    def model_function_standard_definition(cls) -> StandardFunctionDefinition:
        """
        Get a standard definition of this model.
        """
        schema = dict(cls.model_function_json_schema())

        schema.pop("title", None)  # Because we have function name.
        description = schema.pop("description", "")  # Because we pass it separately.
        description = cls.model_function_custom_description or description
        description = dedent(description).strip()

        return StandardFunctionDefinition(
            name=cls.model_function_name(), description=description, json_schema=schema
        )

    @classmethod
    def model_function_definition(cls) -> Function:
        """
        Function definition for the `functions` array parameter in the API.
        """
        std = cls.model_function_standard_definition()
        return std.function_def_for_chat_completions_api()

    @classmethod
    def model_function_run_call(cls, call: AnyFunctionCall) -> FunctionCallResult:
        """
        Parse, validate, and handle a function call.
        """
        call = StandardFunctionCall.from_any_call(call)
        try:
            self = cls.model_validate_json(call.arguments or "{}")
        except pydantic.ValidationError as e:
            logger.warning("Invalid arguments for function `%s`: %s", call.name, e)
            return FunctionCallFailure(
                name=call.name,
                result_content=str(e),
                fail_reason="invalid_arguments",
                exception=e,
            )

        # Run the subclass's handler and **only** catch errors they explicitly threw
        # with the intent of being caught here.
        try:
            value = self.model_function_handler()
        except ErrorForLLMToSee as e:
            logger.warning("Function `%s` reported an error: %s", call.name, e)
            return FunctionCallFailure(
                name=call.name,
                result_content=str(e),
                fail_reason="explicit_handler_error",
                exception=e,
            )

        return FunctionCallSuccess(
            name=call.name, result_content=format_result_content(value), value=value
        )

    @classmethod
    def model_function_from_callable(
        cls, fn: Callable[..., Any], /, name: str | None = None
    ) -> "type[BaseFunctionModel]":
        """
        Declare a function model from a plain Python function. Parameters become
        model fields, and the docstring becomes the function and parameter
        descriptions.
        """
        if inspect.iscoroutinefunction(fn) and not inspect.iscoroutinefunction(
            cls.model_function_handler
        ):
            raise TypeError(
                f"Cannot declare function `{fn.__name__}`: coroutine functions can "
                "only be registered with `chatturn.openai.aio`."
            )
        signature = CallableSignature(fn)

        class CallableFunction(cls):
            model_function_custom_name = name or signature.name
            model_function_custom_description = signature.description

            def model_function_handler(self) -> Any:
                arguments = {f: getattr(self, f) for f in type(self).model_fields}
                args, kwargs = signature.split_arguments(arguments)
                result = fn(*args, **kwargs)
                return result

        model = pydantic.create_model(
            signature.name,
            __base__=CallableFunction,
            __module__=fn.__module__,
            **signature.model_fields(),  # pyright: ignore[reportArgumentType]
        )
        return model
