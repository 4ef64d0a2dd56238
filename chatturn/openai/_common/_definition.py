from typing import Any
from pydantic import BaseModel
from openai.types.chat.completion_create_params import Function

__all__ = ["StandardFunctionDefinition"]


class StandardFunctionDefinition(BaseModel):
    """
    A common data structure from which we derive the function definitions sent
    in the `functions` array of a Chat Completions request.
    """

    name: str
    description: str
    json_schema: dict[str, Any]

    def function_def_for_chat_completions_api(self) -> Function:
        """
        Function definition for the `functions` array in the Chat Completions API
        """
        function: Function = {"name": self.name, "parameters": self.json_schema}
        if self.description:
            function["description"] = self.description
        return function
