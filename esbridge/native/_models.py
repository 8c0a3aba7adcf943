from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

from esbridge.core import DataModel, warn

from ._coercion import ValueConverter


class ContentType(str, Enum):
    JSON = "json"
    SMILE = "smile"

    @classmethod
    def resolve(cls, value: Any) -> ContentType:
        """Resolve a content type from a content type,
        an enum member or a (case insensitive) string.
        Unknown strings fall back to JSON.
        """
        if isinstance(value, ContentType):
            return value
        if isinstance(value, Enum):
            return cls.resolve(ValueConverter.key_name(value))
        if isinstance(value, str):
            content_type = _CONTENT_TYPES.get(value.lower())
            if content_type is None:
                warn("Unknown content type %r. Falling back to json", value)
                return ContentType.JSON
            return content_type
        raise TypeError(f"Cannot resolve content type from {value!r}")

    @property
    def mimetype(self) -> str:
        return f"application/{self.value}"


_CONTENT_TYPES = {
    "application/json": ContentType.JSON,
    "text/json": ContentType.JSON,
    "json": ContentType.JSON,
    "application/smile": ContentType.SMILE,
    "smile": ContentType.SMILE,
}


class VersionType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"

    @classmethod
    def resolve(cls, value: Any) -> VersionType:
        """Resolve a version type. Unknown strings fall back to INTERNAL."""
        if isinstance(value, VersionType):
            return value
        if isinstance(value, Enum):
            return cls.resolve(ValueConverter.key_name(value))
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == VersionType.INTERNAL.value:
                return VersionType.INTERNAL
            if lowered == VersionType.EXTERNAL.value:
                return VersionType.EXTERNAL
            warn("Unknown version type %r. Falling back to internal", value)
            return VersionType.INTERNAL
        raise TypeError(f"Cannot resolve version type from {value!r}")


def to_content_type(value: Any) -> ContentType:
    return ContentType.resolve(value)


def to_version_type(value: Any) -> VersionType:
    return VersionType.resolve(value)


class Settings(Mapping[str, str]):
    """Immutable index settings.

    Keys are setting names, values their string form.
    """

    __slots__ = ("_entries",)

    _entries: dict[str, str]

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        object.__setattr__(self, "_entries", dict(entries or {}))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Settings are immutable")

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Settings({self._entries!r})"

    def __copy__(self) -> Settings:
        return self

    def __deepcopy__(self, memo: dict) -> Settings:
        return self

    def __reduce__(self):
        return (Settings, (self._entries,))

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)


EMPTY_SETTINGS = Settings()


def to_settings(value: Mapping | None) -> Settings:
    """Convert a settings map into immutable settings.

    Nested maps are flattened into dotted keys.

    Args:
        value:
            Settings map or None.

    Returns:
        Settings. None returns the shared empty settings.
    """
    if value is None:
        return EMPTY_SETTINGS
    if isinstance(value, Settings):
        return value
    entries: dict[str, str] = {}
    _flatten_settings(entries, "", value)
    return Settings(entries)


def _flatten_settings(entries: dict, prefix: str, value: Mapping) -> None:
    for k, v in value.items():
        key = f"{prefix}{ValueConverter.key_name(k)}"
        if isinstance(v, Mapping):
            _flatten_settings(entries, f"{key}.", v)
        else:
            entries[key] = ValueConverter.to_param(v)


class SocketTransportAddress(DataModel):
    """Host and port of a node."""

    host: str
    """Host name or address."""

    port: int
    """Port."""

    scheme: str = "http"
    """URL scheme."""

    def to_node(self) -> dict[str, Any]:
        return {"host": self.host, "port": self.port, "scheme": self.scheme}


class LocalTransportAddress(DataModel):
    """In-process node address."""

    id: str
    """Local node id."""


def to_socket_address(host: str, port: int) -> SocketTransportAddress:
    return SocketTransportAddress(host=host, port=port)


def to_local_address(id: str) -> LocalTransportAddress:
    return LocalTransportAddress(id=id)


class IndexOptions(DataModel):
    """Index operation options."""

    id: str | int | None = None
    """Document id."""

    routing: str | None = None
    """Routing value."""

    parent: str | int | None = None
    """Parent document id."""

    timestamp: str | int | None = None
    """Document timestamp."""

    ttl: str | int | None = None
    """Document time to live."""

    op_type: Any = None
    """Operation type, index or create."""

    refresh: bool | None = None
    """Refresh the shard after the operation."""

    version_type: Any = None
    """Version type."""

    percolate: str | None = None
    """Percolate query filter."""

    content_type: Any = None
    """Content type of the source."""


class GetOptions(DataModel):
    """Get operation options."""

    parent: str | int | None = None
    preference: str | None = None
    routing: str | None = None
    fields: Any = None


class MultiGetOptions(DataModel):
    """Multi-get operation options."""

    preference: str | None = None
    refresh: bool | None = None
    realtime: bool | None = None


class CountOptions(DataModel):
    """Count operation options."""

    query: dict[Any, Any] | None = None
    """Query to count matches for."""

    min_score: float | None = None
    """Minimum score of counted documents."""

    routing: Any = None
    """One or more routing values."""


class DeleteOptions(DataModel):
    """Delete operation options."""

    routing: str | None = None
    refresh: bool | None = None
    version: int | None = None
    version_type: Any = None
    parent: str | int | None = None


class ScrollOptions(DataModel):
    """Scroll operation options."""

    scroll: str | None = None
    """Scroll keep alive, for example 1m."""


class CreateIndexOptions(DataModel):
    """Create index options."""

    settings: dict[Any, Any] | None = None
    """Index settings."""

    mappings: dict[Any, Any] | None = None
    """Mappings, keyed by mapping type."""


class OptimizeOptions(DataModel):
    """Optimize operation options."""

    wait_for_merge: bool | None = None
    max_num_segments: int | None = None
    only_expunge_deletes: bool | None = None
    flush: bool | None = None
    refresh: bool | None = None


class FlushOptions(DataModel):
    """Flush operation options."""

    refresh: bool | None = None
    force: bool | None = None
    full: bool | None = None


class ClearCacheOptions(DataModel):
    """Clear cache operation options."""

    filter_cache: bool | None = None
    field_data_cache: bool | None = None
    id_cache: bool | None = None
    fields: Any = None


class StatsOptions(DataModel):
    """Indices stats options."""

    docs: bool | None = None
    store: bool | None = None
    indexing: bool | None = None
    types: Any = None
    groups: Any = None
    get: bool | None = None
    search: bool | None = None
    merge: bool | None = None
    flush: bool | None = None
    refresh: bool | None = None


class StatusOptions(DataModel):
    """Indices status options."""

    recovery: bool | None = None
    snapshot: bool | None = None


class AliasesOptions(DataModel):
    """Aliases operation options."""

    timeout: str | None = None
    """Acknowledgement timeout, for example 5s."""


class TemplateOptions(DataModel):
    """Index template options."""

    template: str | None = None
    """Index name pattern the template applies to."""

    settings: dict[Any, Any] | None = None
    """Index settings."""

    mappings: dict[Any, Any] | None = None
    """Mappings, keyed by mapping type."""

    order: int | None = None
    """Template order."""
