"""
Typed requests. Every field starts at the native default and is
set by the request converters.
"""

from typing import Any, ClassVar
from urllib.parse import quote

from esbridge.core import DataModel

from ._coercion import ValueConverter
from ._models import EMPTY_SETTINGS, ContentType, Settings, VersionType
from ._responses import (
    AcknowledgedResponse,
    BroadcastResponse,
    CountResponse,
    DeleteResponse,
    GetResponse,
    IndexResponse,
    IndicesExistsResponse,
    IndicesSegmentResponse,
    IndicesStatsResponse,
    IndicesStatusResponse,
    MultiGetResponse,
    NativeResponse,
    SearchResponse,
)

JSON_HEADERS = {
    "accept": "application/json",
    "content-type": "application/json",
}

STATS_FLAGS = (
    "docs",
    "store",
    "indexing",
    "get",
    "search",
    "merge",
    "flush",
    "refresh",
)


class RestCall(DataModel):
    """REST call rendered from a typed request."""

    method: str
    path: str
    params: dict[str, str] = {}
    headers: dict[str, str] = {}
    body: Any = None


class NativeRequest(DataModel):
    """Native request."""

    response_type: ClassVar[type[NativeResponse]] = NativeResponse
    parse_not_found: ClassVar[bool] = False
    """Parse the body of a 404 response instead of raising."""

    def to_rest(self) -> RestCall:
        raise NotImplementedError

    def _params(self, **names: str) -> dict[str, str]:
        params: dict[str, str] = {}
        for field, param in names.items():
            value = getattr(self, field)
            if value is None or value == self.get_default_value(field):
                continue
            params[param] = ValueConverter.to_param(value)
        return params


def _path(*parts: str | None) -> str:
    return "/" + "/".join(part for part in parts if part)


def _names(names: list[str] | None) -> str | None:
    if not names:
        return None
    return ",".join(quote(name, safe="*") for name in names)


class IndexRequest(NativeRequest):
    """Index a document."""

    response_type: ClassVar[type[NativeResponse]] = IndexResponse

    index: str
    type: str
    source: dict[str, Any] = {}
    id: str | None = None
    routing: str | None = None
    parent: str | None = None
    timestamp: str | int | None = None
    ttl: str | int | None = None
    op_type: str = "index"
    refresh: bool = False
    version_type: VersionType = VersionType.INTERNAL
    percolate: str | None = None
    content_type: ContentType = ContentType.JSON

    def to_rest(self) -> RestCall:
        params = self._params(
            routing="routing",
            parent="parent",
            timestamp="timestamp",
            ttl="ttl",
            op_type="op_type",
            refresh="refresh",
            version_type="version_type",
            percolate="percolate",
        )
        headers = {
            "accept": "application/json",
            "content-type": self.content_type.mimetype,
        }
        return RestCall(
            method="PUT" if self.id else "POST",
            path=_path(
                quote(self.index),
                quote(self.type),
                quote(self.id) if self.id else None,
            ),
            params=params,
            headers=headers,
            body=self.source,
        )


class GetRequest(NativeRequest):
    """Get a document."""

    response_type: ClassVar[type[NativeResponse]] = GetResponse
    parse_not_found: ClassVar[bool] = True

    index: str
    type: str
    id: str
    routing: str | None = None
    parent: str | None = None
    preference: str | None = None
    fields: list[str] | None = None

    def to_rest(self) -> RestCall:
        return RestCall(
            method="GET",
            path=_path(quote(self.index), quote(self.type), quote(self.id)),
            params=self._params(
                routing="routing",
                parent="parent",
                preference="preference",
                fields="fields",
            ),
            headers=dict(JSON_HEADERS),
        )


class MultiGetItem(DataModel):
    """Document address in a multi-get request."""

    index: str
    type: str | None = None
    id: str


class MultiGetRequest(NativeRequest):
    """Get several documents."""

    response_type: ClassVar[type[NativeResponse]] = MultiGetResponse

    items: list[MultiGetItem] = []
    preference: str | None = None
    refresh: bool = False
    realtime: bool = True

    def add(self, index: str, type: str | None, id: str) -> None:
        self.items.append(MultiGetItem(index=index, type=type, id=id))

    def to_rest(self) -> RestCall:
        docs = []
        for item in self.items:
            doc = {"_index": item.index, "_id": item.id}
            if item.type is not None:
                doc["_type"] = item.type
            docs.append(doc)
        return RestCall(
            method="POST",
            path="/_mget",
            params=self._params(
                preference="preference",
                refresh="refresh",
                realtime="realtime",
            ),
            headers=dict(JSON_HEADERS),
            body={"docs": docs},
        )


class CountRequest(NativeRequest):
    """Count documents matching a query."""

    response_type: ClassVar[type[NativeResponse]] = CountResponse

    indices: list[str] = []
    types: list[str] = []
    query: dict[str, Any] | None = None
    min_score: float | None = None
    routing: list[str] | None = None

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), _names(self.types), "_count"),
            params=self._params(min_score="min_score", routing="routing"),
            headers=dict(JSON_HEADERS),
            body={"query": self.query} if self.query else None,
        )


class DeleteRequest(NativeRequest):
    """Delete a document."""

    response_type: ClassVar[type[NativeResponse]] = DeleteResponse
    parse_not_found: ClassVar[bool] = True

    index: str
    type: str
    id: str
    routing: str | None = None
    refresh: bool = False
    version: int | None = None
    version_type: VersionType = VersionType.INTERNAL
    parent: str | None = None

    def to_rest(self) -> RestCall:
        return RestCall(
            method="DELETE",
            path=_path(quote(self.index), quote(self.type), quote(self.id)),
            params=self._params(
                routing="routing",
                refresh="refresh",
                version="version",
                version_type="version_type",
                parent="parent",
            ),
            headers=dict(JSON_HEADERS),
        )


class SearchRequest(NativeRequest):
    """Search documents."""

    response_type: ClassVar[type[NativeResponse]] = SearchResponse

    indices: list[str] = []
    types: list[str] = []
    source: dict[str, Any] | None = None
    search_type: str | None = None
    scroll: str | None = None
    routing: str | None = None
    preference: str | None = None

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), _names(self.types), "_search"),
            params=self._params(
                search_type="search_type",
                scroll="scroll",
                routing="routing",
                preference="preference",
            ),
            headers=dict(JSON_HEADERS),
            body=self.source,
        )


class SearchScrollRequest(NativeRequest):
    """Fetch the next page of a scrolled search."""

    response_type: ClassVar[type[NativeResponse]] = SearchResponse

    scroll_id: str
    scroll: str | None = None

    def to_rest(self) -> RestCall:
        params = self._params(scroll="scroll")
        params["scroll_id"] = self.scroll_id
        return RestCall(
            method="GET",
            path="/_search/scroll",
            params=params,
            headers=dict(JSON_HEADERS),
        )


class IndicesExistsRequest(NativeRequest):
    """Check whether indices exist."""

    response_type: ClassVar[type[NativeResponse]] = IndicesExistsResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(method="HEAD", path=_path(_names(self.indices)))


class CreateIndexRequest(NativeRequest):
    """Create an index."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    index: str
    settings: Settings = EMPTY_SETTINGS
    mappings: dict[str, dict[str, Any]] = {}

    def mapping(self, type: str, source: dict[str, Any]) -> None:
        self.mappings[type] = source

    def to_rest(self) -> RestCall:
        body: dict[str, Any] = {}
        if self.settings:
            body["settings"] = self.settings.to_dict()
        if self.mappings:
            body["mappings"] = self.mappings
        return RestCall(
            method="PUT",
            path=_path(quote(self.index)),
            headers=dict(JSON_HEADERS),
            body=body or None,
        )


class DeleteIndexRequest(NativeRequest):
    """Delete indices."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="DELETE",
            path=_path(_names(self.indices)),
            headers=dict(JSON_HEADERS),
        )


class UpdateSettingsRequest(NativeRequest):
    """Update settings of indices."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    indices: list[str]
    settings: Settings = EMPTY_SETTINGS

    def to_rest(self) -> RestCall:
        return RestCall(
            method="PUT",
            path=_path(_names(self.indices), "_settings"),
            headers=dict(JSON_HEADERS),
            body=self.settings.to_dict(),
        )


class OpenIndexRequest(NativeRequest):
    """Open closed indices."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_open"),
            headers=dict(JSON_HEADERS),
        )


class CloseIndexRequest(NativeRequest):
    """Close indices."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_close"),
            headers=dict(JSON_HEADERS),
        )


class OptimizeRequest(NativeRequest):
    """Merge index segments."""

    response_type: ClassVar[type[NativeResponse]] = BroadcastResponse

    indices: list[str]
    wait_for_merge: bool = True
    max_num_segments: int | None = None
    only_expunge_deletes: bool = False
    flush: bool = True
    refresh: bool = True

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_optimize"),
            params=self._params(
                wait_for_merge="wait_for_merge",
                max_num_segments="max_num_segments",
                only_expunge_deletes="only_expunge_deletes",
                flush="flush",
                refresh="refresh",
            ),
            headers=dict(JSON_HEADERS),
        )


class FlushRequest(NativeRequest):
    """Flush indices."""

    response_type: ClassVar[type[NativeResponse]] = BroadcastResponse

    indices: list[str]
    refresh: bool = False
    force: bool = False
    full: bool = False

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_flush"),
            params=self._params(refresh="refresh", force="force", full="full"),
            headers=dict(JSON_HEADERS),
        )


class RefreshRequest(NativeRequest):
    """Refresh indices."""

    response_type: ClassVar[type[NativeResponse]] = BroadcastResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_refresh"),
            headers=dict(JSON_HEADERS),
        )


class GatewaySnapshotRequest(NativeRequest):
    """Snapshot indices through the gateway."""

    response_type: ClassVar[type[NativeResponse]] = BroadcastResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_gateway", "snapshot"),
            headers=dict(JSON_HEADERS),
        )


class ClearIndicesCacheRequest(NativeRequest):
    """Clear index caches."""

    response_type: ClassVar[type[NativeResponse]] = BroadcastResponse

    indices: list[str]
    filter_cache: bool = False
    field_data_cache: bool = False
    id_cache: bool = False
    fields: list[str] | None = None

    def to_rest(self) -> RestCall:
        return RestCall(
            method="POST",
            path=_path(_names(self.indices), "_cache", "clear"),
            params=self._params(
                filter_cache="filter",
                field_data_cache="field_data",
                id_cache="id",
                fields="fields",
            ),
            headers=dict(JSON_HEADERS),
        )


class IndicesStatsRequest(NativeRequest):
    """Index statistics."""

    response_type: ClassVar[type[NativeResponse]] = IndicesStatsResponse

    indices: list[str] = []
    docs: bool = True
    store: bool = True
    indexing: bool = True
    get: bool = True
    search: bool = True
    merge: bool = False
    flush: bool = False
    refresh: bool = False
    types: list[str] | None = None
    groups: list[str] | None = None

    def all(self) -> None:
        """Request every statistic."""
        for flag in STATS_FLAGS:
            setattr(self, flag, True)

    def to_rest(self) -> RestCall:
        params = self._params(
            types="types",
            groups="groups",
            **{flag: flag for flag in STATS_FLAGS},
        )
        return RestCall(
            method="GET",
            path=_path(_names(self.indices), "_stats"),
            params=params,
            headers=dict(JSON_HEADERS),
        )


class IndicesStatusRequest(NativeRequest):
    """Index status."""

    response_type: ClassVar[type[NativeResponse]] = IndicesStatusResponse

    indices: list[str]
    recovery: bool = False
    snapshot: bool = False

    def to_rest(self) -> RestCall:
        return RestCall(
            method="GET",
            path=_path(_names(self.indices), "_status"),
            params=self._params(recovery="recovery", snapshot="snapshot"),
            headers=dict(JSON_HEADERS),
        )


class IndicesSegmentsRequest(NativeRequest):
    """Index segments."""

    response_type: ClassVar[type[NativeResponse]] = IndicesSegmentResponse

    indices: list[str]

    def to_rest(self) -> RestCall:
        return RestCall(
            method="GET",
            path=_path(_names(self.indices), "_segments"),
            headers=dict(JSON_HEADERS),
        )


class AliasAction(DataModel):
    """Alias action."""

    action: str
    """Action, add or remove."""

    index: str
    alias: str
    filter: dict[str, Any] | None = None


class IndicesAliasesRequest(NativeRequest):
    """Add or remove index aliases."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    actions: list[AliasAction] = []
    timeout: str | None = None

    def add_alias(
        self,
        index: str,
        alias: str,
        filter: dict[str, Any] | None = None,
    ) -> None:
        self.actions.append(
            AliasAction(action="add", index=index, alias=alias, filter=filter)
        )

    def remove_alias(self, index: str, alias: str) -> None:
        self.actions.append(
            AliasAction(action="remove", index=index, alias=alias)
        )

    def to_rest(self) -> RestCall:
        actions = []
        for action in self.actions:
            target: dict[str, Any] = {
                "index": action.index,
                "alias": action.alias,
            }
            if action.filter is not None:
                target["filter"] = action.filter
            actions.append({action.action: target})
        return RestCall(
            method="POST",
            path="/_aliases",
            params=self._params(timeout="timeout"),
            headers=dict(JSON_HEADERS),
            body={"actions": actions},
        )


class PutIndexTemplateRequest(NativeRequest):
    """Put an index template."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    name: str
    template: str | None = None
    settings: Settings = EMPTY_SETTINGS
    mappings: dict[str, dict[str, Any]] = {}
    order: int = 0
    create: bool = False
    """Fail if the template already exists."""

    def mapping(self, type: str, source: dict[str, Any]) -> None:
        self.mappings[type] = source

    def to_rest(self) -> RestCall:
        body: dict[str, Any] = {"template": self.template, "order": self.order}
        if self.settings:
            body["settings"] = self.settings.to_dict()
        if self.mappings:
            body["mappings"] = self.mappings
        return RestCall(
            method="PUT",
            path=_path("_template", quote(self.name)),
            params=self._params(create="create"),
            headers=dict(JSON_HEADERS),
            body=body,
        )


class DeleteIndexTemplateRequest(NativeRequest):
    """Delete an index template."""

    response_type: ClassVar[type[NativeResponse]] = AcknowledgedResponse

    name: str

    def to_rest(self) -> RestCall:
        return RestCall(
            method="DELETE",
            path=_path("_template", quote(self.name)),
            headers=dict(JSON_HEADERS),
        )
