from typing import Any, Callable, get_type_hints
from textwrap import dedent
from copy import copy
import inspect
import docstring_parser
import pydantic
from pydantic.fields import FieldInfo

__all__ = ["CallableSignature"]

_RESERVED_PREFIX = "model_"


class CallableSignature:
    """
    Parameters and documentation of a plain Python function, in the shape needed
    to declare a pydantic model whose fields are the function's parameters.
    """

    def __init__(self, fn: Callable[..., Any]):
        self.fn = fn
        self.name: str = fn.__name__
        self.parameters = list(inspect.signature(fn).parameters.values())

        for param in self.parameters:
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                raise ValueError(
                    f"Cannot declare function `{self.name}`: variadic parameter "
                    f"'{param.name}' has no JSON Schema equivalent."
                )
            if param.name.startswith(_RESERVED_PREFIX):
                raise ValueError(
                    f"Cannot declare function `{self.name}`: parameter names "
                    f"starting with '{_RESERVED_PREFIX}' are reserved."
                )

        # `get_type_hints()` evaluates forward references, unlike `inspect`.
        self.type_hints = get_type_hints(fn)
        self.docstring = docstring_parser.parse(dedent(fn.__doc__ or "").strip())

    @property
    def positional_only(self) -> list[str]:
        return [p.name for p in self.parameters if p.kind == p.POSITIONAL_ONLY]

    @property
    def description(self) -> str:
        """
        The docstring, without its parameter/returns sections.
        """
        doc = self.docstring
        parts = [doc.short_description, doc.long_description]
        return "\n\n".join(p.strip() for p in parts if p)

    def model_fields(self) -> dict[str, tuple[Any, FieldInfo]]:
        """
        Field definitions for `pydantic.create_model()`.
        """
        descriptions = {
            p.arg_name: p.description for p in self.docstring.params if p.description
        }
        fields: dict[str, tuple[Any, FieldInfo]] = {}
        for param in self.parameters:
            default = param.default
            if isinstance(default, FieldInfo):
                info = copy(default)
                if info.description is None:
                    info.description = descriptions.get(param.name)
            else:
                info = pydantic.Field(
                    default=... if default is param.empty else default,
                    description=descriptions.get(param.name),
                )
            fields[param.name] = (self.type_hints.get(param.name, Any), info)
        return fields

    def split_arguments(
        self, arguments: dict[str, Any]
    ) -> tuple[list[Any], dict[str, Any]]:
        """
        Split validated arguments into positional and keyword arguments for `fn`.
        """
        kwargs = dict(arguments)
        args = [kwargs.pop(name) for name in self.positional_only]
        return args, kwargs
