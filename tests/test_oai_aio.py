from typing import Literal
import inspect
import pytest
import asyncio
import pydantic
from chatturn.openai.aio import (
    BaseFunctionModel,
    FunctionGroup,
    FunctionCallSuccess,
    FunctionNotFoundError,
    StandardFunctionCall,
    ErrorForLLMToSee,
)


def make_call(name: str, arguments: str) -> StandardFunctionCall:
    return StandardFunctionCall(name=name, arguments=arguments)


class get_weather(BaseFunctionModel):
    """Get the weather somewhere."""

    city: str
    """City to get the weather for."""


def test_definition():
    definition = get_weather.model_function_definition()
    assert definition["name"] == "get_weather"
    assert definition.get("description") == "Get the weather somewhere."
    parameters = definition["parameters"]
    assert "title" not in parameters
    assert parameters["required"] == ["city"]
    assert parameters["properties"]["city"]["description"] == (
        "City to get the weather for."
    )

    group = FunctionGroup.from_list([get_weather])
    assert group.function_definitions() == [definition]
    assert "get_weather" in group
    assert get_weather in group


def test_config():
    class RegularFunction(BaseFunctionModel):
        """A docstring"""

        pass

    assert RegularFunction.model_function_name() == "RegularFunction"
    schema = RegularFunction.model_function_json_schema()
    assert schema["properties"] == {}
    definition = RegularFunction.model_function_standard_definition()
    assert definition.description == "A docstring"

    class BaseFunction(BaseFunctionModel):
        model_function_name_generator = lambda name: name.upper()

    assert BaseFunction.model_function_name() == "BASEFUNCTION"

    class Function(BaseFunction):
        """A docstring"""

        model_function_custom_name = "custom_function_name"
        model_function_custom_description = "custom description"
        model_function_custom_json_schema = {"type": "object", "properties": {}}

    assert Function.model_function_name() == "custom_function_name"
    assert Function.model_function_json_schema() == {
        "type": "object",
        "properties": {},
    }
    definition = Function.model_function_standard_definition()
    assert definition.description == "custom description"


def test_from_callable():
    def get_weather(city: str, unit: Literal["C", "F"] = "C") -> str:
        """
        Get the current weather in a city.

        Args:
            city: Name of the city.
            unit: Temperature unit.
        """
        return f"Sunny, 20{unit} in {city}"

    def add(a: int, b: int = 0, /) -> int:
        return a + b

    def no_hints(value):
        return value

    group = FunctionGroup()
    assert group.add_function(get_weather) is get_weather
    group.add_function(add)
    group.add_function(no_hints)
    assert get_weather in group
    assert add in group
    assert "no_hints" in group

    def unregistered() -> None:
        pass

    assert unregistered not in group
    assert object() not in group

    definition = group["get_weather"].model_function_definition()
    assert definition["name"] == "get_weather"
    assert definition.get("description") == "Get the current weather in a city."
    properties = definition["parameters"]["properties"]
    assert properties["city"]["description"] == "Name of the city."
    assert properties["unit"]["description"] == "Temperature unit."
    assert definition["parameters"]["required"] == ["city"]
    assert "description" not in group["add"].model_function_definition()

    async def main():
        result = await group.run_function_call(
            make_call("get_weather", '{"city": "Tokyo"}')
        )
        assert isinstance(result, FunctionCallSuccess)
        assert result.result_content == "Sunny, 20C in Tokyo"

        result = await group.run_function_call(make_call("add", '{"a": 1, "b": 2}'))
        assert result.value == 3
        assert result.result_content == "3"

        result = await group.run_function_call(make_call("no_hints", '{"value": [1]}'))
        assert result.result_content == "[1]"

        result = await group.run_function_call(make_call("add", '{"a": "x"}'))
        assert result.fail_reason == "invalid_arguments"

    asyncio.run(main())


def test_from_callable_rejects_unsupported_parameters():
    def variadic(*args: int) -> int:
        return sum(args)

    def reserved(model_name: str) -> str:
        return model_name

    with pytest.raises(ValueError):
        BaseFunctionModel.model_function_from_callable(variadic)
    with pytest.raises(ValueError):
        BaseFunctionModel.model_function_from_callable(reserved)


def test_from_callable_with_field_defaults():
    def search(query: str, limit: int = pydantic.Field(default=5, le=10)) -> str:
        """
        Search the docs.

        Args:
            limit: Maximum number of hits.
        """
        return f"{limit} hits for {query}"

    model = BaseFunctionModel.model_function_from_callable(search, name="docs_search")
    assert model.model_function_name() == "docs_search"
    schema = model.model_function_standard_definition().json_schema
    assert schema["properties"]["limit"]["description"] == "Maximum number of hits."
    # The `Field` object in the signature is left untouched.
    assert inspect.signature(search).parameters["limit"].default.description is None

    async def main():
        result = await model.model_function_run_call(
            make_call("docs_search", '{"query": "x", "limit": 11}')
        )
        assert result.fail_reason == "invalid_arguments"
        result = await model.model_function_run_call(
            make_call("docs_search", '{"query": "x"}')
        )
        assert result.result_content == "5 hits for x"

    asyncio.run(main())


def test_function_handler():
    async def main():
        class NotImplementedFunction(BaseFunctionModel):
            x: int = 0

        class Function(BaseFunctionModel):
            x: Literal[0, 1, 2] = 0

            async def model_function_handler(self) -> dict[str, int]:
                if self.x == 1:
                    raise ErrorForLLMToSee("hi from error")
                if self.x == 2:
                    raise RuntimeError("not for the LLM")
                return {"x": self.x}

        group = FunctionGroup.from_list([NotImplementedFunction, Function])

        result = await group.run_function_call(make_call("Function", "{}"))
        assert result.fail_reason is None
        assert result.value == {"x": 0}
        assert result.result_content == '{"x":0}'

        result = await group.run_function_call(make_call("Function", ""))
        assert result.fail_reason is None

        result = await group.run_function_call(make_call("Function", '{"x": 4}'))
        assert result.fail_reason == "invalid_arguments"
        assert isinstance(result.exception, pydantic.ValidationError)

        result = await group.run_function_call(make_call("Function", "not json"))
        assert result.fail_reason == "invalid_arguments"

        result = await group.run_function_call(make_call("Function", '{"x": 1}'))
        assert result.fail_reason == "explicit_handler_error"
        assert result.result_content == "hi from error"
        assert result.function_message.role == "function"
        assert result.function_message.name == "Function"
        assert result.function_message.content == "hi from error"

        result = await group.run_function_call(make_call("INVALID", "{}"))
        assert result.fail_reason == "invalid_name"
        assert isinstance(result.exception, FunctionNotFoundError)
        assert result.result_content == "Function `INVALID` not found."

        with pytest.raises(RuntimeError):
            await group.run_function_call(make_call("Function", '{"x": 2}'))

        with pytest.raises(NotImplementedError):
            await group.run_function_call(make_call("NotImplementedFunction", "{}"))

    asyncio.run(main())


def test_duplicate_names():
    class Function(BaseFunctionModel):
        pass

    def Function2():
        return None

    class Other(BaseFunctionModel):
        model_function_custom_name = "Function2"

    with pytest.raises(ValueError):
        FunctionGroup.from_list([Function, Function])
    with pytest.raises(ValueError):
        FunctionGroup.from_list([Function2, Other])
