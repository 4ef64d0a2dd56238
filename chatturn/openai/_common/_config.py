from typing import Any, Literal
from pydantic import BaseModel, Field

__all__ = ["ChatConfig", "FunctionCallPolicy", "DEFAULT_MAX_ROUNDS"]

DEFAULT_MAX_ROUNDS = 10

type FunctionCallPolicy = Literal["auto", "none"] | str


class ChatConfig(BaseModel):
    """
    Model and sampling parameters for a chat client. Every generation parameter
    is optional: when left as `None` it's omitted from the request, and the API
    applies its own default. Change any of them by assigning to the field.
    """

    model: str
    """ID of the model to use."""

    temperature: float | None = None
    """
    Sampling temperature, between 0 and 2. Higher values make the output more
    random. It's generally recommended to alter this or `top_p`, but not both.
    """

    top_p: float | None = None
    """
    Nucleus sampling: only tokens comprising the top `top_p` probability mass are
    considered. It's generally recommended to alter this or `temperature`, but not
    both.
    """

    n: int | None = None
    """How many completion choices to generate. Only the first is used."""

    stop: list[str] | None = None
    """Up to 4 sequences where the API will stop generating further tokens."""

    max_tokens: int | None = None
    """Maximum number of tokens to generate."""

    presence_penalty: float | None = None
    """Between -2.0 and 2.0. Positive values favor talking about new topics."""

    frequency_penalty: float | None = None
    """Between -2.0 and 2.0. Positive values discourage verbatim repetition."""

    logit_bias: dict[str, int] | None = None
    """Maps token IDs to a bias value from -100 to 100."""

    user: str | None = None
    """Unique identifier of your end-user."""

    function_call: FunctionCallPolicy | None = None
    """'auto', 'none', or the name of a function to force. Defaults to 'auto'."""

    timeout: float | None = None
    """Seconds before the HTTP request is abandoned. Client default if unset."""

    max_rounds: int = Field(default=DEFAULT_MAX_ROUNDS, ge=1)
    """Maximum number of API calls made in a single turn."""

    def generation_params(self) -> dict[str, Any]:
        """
        The parameters that are forwarded with every request, without unset ones.
        """
        return self.model_dump(
            exclude={"model", "function_call", "timeout", "max_rounds"},
            exclude_none=True,
        )
