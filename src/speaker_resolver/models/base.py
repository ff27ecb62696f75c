"""Base model class with common functionality for all resolver models."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict


T = TypeVar("T", bound="ResolverModel")


class ResolverModel(BaseModel):
    """Base model class with JSON serialization support.

    All resolver models inherit from this class to get consistent
    serialization/deserialization behavior.
    """

    model_config = ConfigDict(
        # Validate field assignments
        validate_assignment=True,
    )

    def to_json(self, indent: int = 2) -> str:
        """Serialize model to JSON string.

        Args:
            indent: Indentation level for pretty printing (default: 2)

        Returns:
            JSON string representation of the model
        """
        return self.model_dump_json(indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize model to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Deserialize model from dictionary."""
        return cls.model_validate(data)

