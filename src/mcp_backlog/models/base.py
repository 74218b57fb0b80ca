"""
Base models for the MCP Backlog API models.

Response models validate raw Backlog JSON through pydantic and expose
simplified, client-facing dictionaries. Malformed upstream payloads surface as
UnexpectedResponseError instead of leaking pydantic internals.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from mcp_backlog.exceptions import UnexpectedResponseError

# Type variable for the return type of from_api_response
T = TypeVar("T", bound="ApiModel")


def _response_issues(error: ValidationError) -> list[dict[str, Any]]:
    return error.errors(include_url=False, include_context=False, include_input=False)


class ApiModel(BaseModel):
    """
    Base model for all Backlog API models with common conversion methods.

    Unknown keys in Backlog responses are ignored; field aliases follow the
    camelCase names used on the wire.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_api_response(cls: type[T], data: Any, **kwargs: Any) -> T:
        """
        Validate a single Backlog API object.

        Args:
            data: The decoded JSON object
            **kwargs: Additional context parameters (unused by default)

        Returns:
            An instance of the model

        Raises:
            UnexpectedResponseError: If the payload does not match the model
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise UnexpectedResponseError(
                f"Unexpected {cls.__name__} payload received from Backlog.",
                details=_response_issues(e),
            ) from e

    @classmethod
    def from_api_list(cls: type[T], data: Any) -> list[T]:
        """
        Validate a JSON array of Backlog API objects.

        Raises:
            UnexpectedResponseError: If ``data`` is not a list or any item is malformed
        """
        if not isinstance(data, list):
            raise UnexpectedResponseError(
                f"Expected a list of {cls.__name__} objects from Backlog, "
                f"got {type(data).__name__}.",
                details=[{"loc": [], "msg": "Input should be a valid list", "type": "list_type"}],
            )
        try:
            return TypeAdapter(list[cls]).validate_python(data)
        except ValidationError as e:
            raise UnexpectedResponseError(
                f"Unexpected {cls.__name__} payload received from Backlog.",
                details=_response_issues(e),
            ) from e

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to a simplified dictionary for tool results.

        Returns:
            A dictionary with only the essential fields
        """
        return self.model_dump()
