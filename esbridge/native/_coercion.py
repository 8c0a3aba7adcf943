from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


class ValueConverter:
    @staticmethod
    def key_name(key: Any) -> str:
        if isinstance(key, Enum):
            return str(key.value)
        if isinstance(key, str):
            return key
        return str(key)

    @staticmethod
    def to_string_array(value: Any) -> list[str]:
        """Coerce a single value or a collection of values
        to a list of strings.

        Args:
            value:
                A name or a collection of names.

        Returns:
            List of names.
        """
        if value is None:
            raise TypeError("Expected a value or a collection, got None")
        if isinstance(value, Mapping):
            raise TypeError(f"Expected a value or a collection, got {value!r}")
        if ValueConverter.is_collection(value):
            return [ValueConverter.key_name(v) for v in value]
        return [ValueConverter.key_name(value)]

    @staticmethod
    def stringify_keys(value: Mapping | None) -> dict[str, Any] | None:
        if value is None:
            return None
        return {ValueConverter.key_name(k): v for k, v in value.items()}

    @staticmethod
    def as_generic(value: Any) -> Any:
        """Deep convert a native structure into plain dicts and lists.

        Mappings become dicts keyed by the canonical key name,
        other collections become lists. Scalars and None pass through.
        """
        if value is None:
            return None
        if isinstance(value, Mapping):
            return {
                ValueConverter.key_name(k): ValueConverter.as_generic(v)
                for k, v in value.items()
            }
        if ValueConverter.is_collection(value):
            return [ValueConverter.as_generic(v) for v in value]
        return value

    @staticmethod
    def is_collection(value: Any) -> bool:
        return (
            isinstance(value, Iterable)
            and not isinstance(value, (str, bytes, bytearray, Mapping))
        )

    @staticmethod
    def to_param(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if ValueConverter.is_collection(value):
            return ",".join(ValueConverter.to_string_array(value))
        return ValueConverter.key_name(value)
