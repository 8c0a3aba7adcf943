__all__ = ["DataModel", "DataModelField", "Empty"]

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticUndefined


class DataModel(BaseModel):
    """Data model.

    Fields may be populated by name or by their REST alias.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
    )

    def to_dict(self):
        return self.model_dump()

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        return cls.model_validate(obj)

    @classmethod
    def get_default_value(cls, name: str) -> Any:
        """Native default of a field. Required fields return Empty."""
        field = cls.model_fields.get(name)
        if field:
            if field.default is PydanticUndefined:
                if field.default_factory is not None:
                    return field.default_factory()  # type: ignore[call-arg]
                return Empty
            return field.default
        raise ValueError(f"Attribute {name} not found in model")


class Empty(DataModel):
    """Empty value."""

    pass


def DataModelField(
    alias: str | None = None,
    exclude: bool | None = None,
    **kwargs,
) -> Any:
    return Field(
        alias=alias,
        exclude=exclude,
        **kwargs,
    )
