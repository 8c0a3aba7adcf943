from collections.abc import Mapping
from typing import Any, TypeVar

from esbridge.core import DataModel

from ._coercion import ValueConverter

T = TypeVar("T", bound=DataModel)


class Helper:
    @staticmethod
    def get_option_key(key: Any) -> str:
        return ValueConverter.key_name(key).replace("-", "_")

    @staticmethod
    def get_options(
        options: Mapping | DataModel | None, options_type: type[T]
    ) -> T:
        if options is None:
            return options_type()
        if isinstance(options, options_type):
            return options
        if isinstance(options, Mapping):
            return options_type.from_dict(
                {Helper.get_option_key(k): v for k, v in options.items()}
            )
        raise TypeError(
            f"Expected {options_type.__name__}, a mapping or None, "
            f"got {options!r}"
        )

    @staticmethod
    def get_field(value: Mapping, *names: str) -> Any:
        for name in names:
            for k, v in value.items():
                if ValueConverter.key_name(k) == name:
                    return v
        return None

    @staticmethod
    def get_id(value: Any) -> str | None:
        if value is None:
            return None
        return ValueConverter.key_name(value)
