"""
Conversion between generic maps and typed requests and responses.

Requests are built from positional arguments and an options map.
Options are applied only when present and truthy; the typed
request keeps its native default otherwise.

Responses are converted to maps shaped like the REST API responses.
Most fields are returned under both a plain and an underscored key.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable

from ._coercion import ValueConverter
from ._helper import Helper
from ._models import (
    AliasesOptions,
    ClearCacheOptions,
    ContentType,
    CountOptions,
    CreateIndexOptions,
    DeleteOptions,
    FlushOptions,
    GetOptions,
    IndexOptions,
    MultiGetOptions,
    OptimizeOptions,
    ScrollOptions,
    StatsOptions,
    StatusOptions,
    TemplateOptions,
    VersionType,
    to_settings,
)
from ._requests import (
    STATS_FLAGS,
    ClearIndicesCacheRequest,
    CloseIndexRequest,
    CountRequest,
    CreateIndexRequest,
    DeleteIndexRequest,
    DeleteIndexTemplateRequest,
    DeleteRequest,
    FlushRequest,
    GatewaySnapshotRequest,
    GetRequest,
    IndexRequest,
    IndicesAliasesRequest,
    IndicesExistsRequest,
    IndicesSegmentsRequest,
    IndicesStatsRequest,
    IndicesStatusRequest,
    MultiGetRequest,
    OpenIndexRequest,
    OptimizeRequest,
    PutIndexTemplateRequest,
    RefreshRequest,
    SearchRequest,
    SearchScrollRequest,
    UpdateSettingsRequest,
)
from ._responses import (
    AcknowledgedResponse,
    BroadcastResponse,
    CountResponse,
    DeleteResponse,
    GetResponse,
    IndexResponse,
    IndexSegments,
    IndicesExistsResponse,
    IndicesSegmentResponse,
    IndicesStatsResponse,
    IndicesStatusResponse,
    MultiGetItemResponse,
    MultiGetResponse,
    NativeResponse,
    SearchHit,
    SearchHits,
    SearchResponse,
    ShardFailure,
    ShardSegments,
)

SEARCH_CONTROL_KEYS = (
    "search-type",
    "search_type",
    "scroll",
    "routing",
    "preference",
)


class OperationConverter:
    @staticmethod
    def convert_index(
        index: Any,
        type: Any,
        document: Mapping,
        options: Mapping | IndexOptions | None = None,
    ) -> IndexRequest:
        opts = Helper.get_options(options, IndexOptions)
        # default content type is json
        request = IndexRequest(
            index=ValueConverter.key_name(index),
            type=ValueConverter.key_name(type),
            source=ValueConverter.stringify_keys(document),
        )
        if opts.id:
            request.id = ValueConverter.key_name(opts.id)
        if opts.content_type:
            request.content_type = ContentType.resolve(opts.content_type)
        if opts.routing:
            request.routing = opts.routing
        if opts.parent:
            request.parent = ValueConverter.key_name(opts.parent)
        if opts.timestamp:
            request.timestamp = opts.timestamp
        if opts.ttl:
            request.ttl = opts.ttl
        if opts.op_type:
            request.op_type = ValueConverter.key_name(opts.op_type).lower()
        if opts.refresh:
            request.refresh = opts.refresh
        if opts.version_type:
            request.version_type = VersionType.resolve(opts.version_type)
        if opts.percolate:
            request.percolate = opts.percolate
        return request

    @staticmethod
    def convert_get(
        index: Any,
        type: Any,
        id: Any,
        options: Mapping | GetOptions | None = None,
    ) -> GetRequest:
        opts = Helper.get_options(options, GetOptions)
        request = GetRequest(
            index=ValueConverter.key_name(index),
            type=ValueConverter.key_name(type),
            id=ValueConverter.key_name(id),
        )
        if opts.routing:
            request.routing = opts.routing
        if opts.parent:
            request.parent = ValueConverter.key_name(opts.parent)
        if opts.preference:
            request.preference = opts.preference
        if opts.fields:
            request.fields = ValueConverter.to_string_array(opts.fields)
        return request

    @staticmethod
    def convert_multi_get(
        queries: Iterable[Mapping],
        options: Mapping | MultiGetOptions | None = None,
    ) -> MultiGetRequest:
        opts = Helper.get_options(options, MultiGetOptions)
        request = MultiGetRequest()
        for query in queries:
            request.add(
                index=Helper.get_id(
                    Helper.get_field(query, "_index", "index")
                ),
                type=Helper.get_id(Helper.get_field(query, "_type", "type")),
                id=Helper.get_id(Helper.get_field(query, "_id", "id")),
            )
        if opts.preference:
            request.preference = opts.preference
        if opts.refresh:
            request.refresh = opts.refresh
        if opts.realtime:
            request.realtime = opts.realtime
        return request

    @staticmethod
    def convert_count(
        index: Any,
        type: Any = None,
        options: Mapping | CountOptions | None = None,
    ) -> CountRequest:
        # two argument form: convert_count(index, options)
        if isinstance(type, Mapping) and options is None:
            type, options = None, type
        opts = Helper.get_options(options, CountOptions)
        request = CountRequest(
            indices=ValueConverter.to_string_array(index),
            types=(
                ValueConverter.to_string_array(type)
                if type is not None
                else []
            ),
        )
        if opts.query:
            request.query = ValueConverter.stringify_keys(opts.query)
        if opts.min_score:
            request.min_score = opts.min_score
        if opts.routing:
            request.routing = ValueConverter.to_string_array(opts.routing)
        return request

    @staticmethod
    def convert_delete(
        index: Any,
        type: Any,
        id: Any,
        options: Mapping | DeleteOptions | None = None,
    ) -> DeleteRequest:
        opts = Helper.get_options(options, DeleteOptions)
        request = DeleteRequest(
            index=ValueConverter.key_name(index),
            type=ValueConverter.key_name(type),
            id=ValueConverter.key_name(id),
        )
        if opts.routing:
            request.routing = opts.routing
        if opts.refresh:
            request.refresh = opts.refresh
        if opts.version:
            request.version = opts.version
        if opts.version_type:
            request.version_type = VersionType.resolve(opts.version_type)
        if opts.parent:
            request.parent = ValueConverter.key_name(opts.parent)
        return request

    @staticmethod
    def convert_search(
        index: Any,
        type: Any,
        options: Mapping | None = None,
    ) -> SearchRequest:
        """Convert search options to a search request.

        The control keys (search type, scroll, routing and preference)
        are applied to the request, the remaining keys form the body.

        Args:
            index:
                Index name or names. None searches all indices.
            type:
                Mapping type or types. None searches all types.
            options:
                Search body and control keys.

        Returns:
            Search request.
        """
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise TypeError(f"Expected a mapping, got {options!r}")
        search_type = Helper.get_field(
            options, "search-type"
        ) or Helper.get_field(options, "search_type")
        scroll = Helper.get_field(options, "scroll")
        routing = Helper.get_field(options, "routing")
        preference = Helper.get_field(options, "preference")
        source = {
            ValueConverter.key_name(k): v
            for k, v in options.items()
            if ValueConverter.key_name(k) not in SEARCH_CONTROL_KEYS
        }

        request = SearchRequest(source=source)
        if index is not None:
            request.indices = ValueConverter.to_string_array(index)
        if type is not None:
            request.types = ValueConverter.to_string_array(type)
        if search_type:
            request.search_type = ValueConverter.key_name(search_type)
        if routing:
            request.routing = ",".join(
                ValueConverter.to_string_array(routing)
            )
        if preference:
            request.preference = preference
        if scroll:
            request.scroll = scroll
        return request

    @staticmethod
    def convert_search_scroll(
        scroll_id: str,
        options: Mapping | ScrollOptions | None = None,
    ) -> SearchScrollRequest:
        opts = Helper.get_options(options, ScrollOptions)
        request = SearchScrollRequest(scroll_id=scroll_id)
        if opts.scroll:
            request.scroll = opts.scroll
        return request

    @staticmethod
    def convert_index_exists(index: Any) -> IndicesExistsRequest:
        return IndicesExistsRequest(
            indices=ValueConverter.to_string_array(index)
        )

    @staticmethod
    def convert_create_index(
        index: Any,
        options: Mapping | CreateIndexOptions | None = None,
    ) -> CreateIndexRequest:
        opts = Helper.get_options(options, CreateIndexOptions)
        request = CreateIndexRequest(index=ValueConverter.key_name(index))
        if opts.settings:
            request.settings = to_settings(opts.settings)
        if opts.mappings:
            OperationConverter._apply_mappings(request, opts.mappings)
        return request

    @staticmethod
    def convert_delete_index(index: Any) -> DeleteIndexRequest:
        return DeleteIndexRequest(
            indices=ValueConverter.to_string_array(index)
        )

    @staticmethod
    def convert_update_settings(
        index: Any,
        settings: Mapping | None,
    ) -> UpdateSettingsRequest:
        return UpdateSettingsRequest(
            indices=ValueConverter.to_string_array(index),
            settings=to_settings(settings),
        )

    @staticmethod
    def convert_open_index(index: Any) -> OpenIndexRequest:
        return OpenIndexRequest(indices=ValueConverter.to_string_array(index))

    @staticmethod
    def convert_close_index(index: Any) -> CloseIndexRequest:
        return CloseIndexRequest(indices=ValueConverter.to_string_array(index))

    @staticmethod
    def convert_optimize(
        index: Any,
        options: Mapping | OptimizeOptions | None = None,
    ) -> OptimizeRequest:
        opts = Helper.get_options(options, OptimizeOptions)
        request = OptimizeRequest(
            indices=ValueConverter.to_string_array(index)
        )
        if opts.wait_for_merge:
            request.wait_for_merge = opts.wait_for_merge
        if opts.max_num_segments:
            request.max_num_segments = opts.max_num_segments
        if opts.only_expunge_deletes:
            request.only_expunge_deletes = opts.only_expunge_deletes
        if opts.flush:
            request.flush = opts.flush
        if opts.refresh:
            request.refresh = opts.refresh
        return request

    @staticmethod
    def convert_flush(
        index: Any,
        options: Mapping | FlushOptions | None = None,
    ) -> FlushRequest:
        opts = Helper.get_options(options, FlushOptions)
        request = FlushRequest(indices=ValueConverter.to_string_array(index))
        if opts.force:
            request.force = opts.force
        if opts.full:
            request.full = opts.full
        if opts.refresh:
            request.refresh = opts.refresh
        return request

    @staticmethod
    def convert_refresh(index: Any) -> RefreshRequest:
        return RefreshRequest(indices=ValueConverter.to_string_array(index))

    @staticmethod
    def convert_gateway_snapshot(index: Any) -> GatewaySnapshotRequest:
        return GatewaySnapshotRequest(
            indices=ValueConverter.to_string_array(index)
        )

    @staticmethod
    def convert_clear_cache(
        index: Any,
        options: Mapping | ClearCacheOptions | None = None,
    ) -> ClearIndicesCacheRequest:
        opts = Helper.get_options(options, ClearCacheOptions)
        request = ClearIndicesCacheRequest(
            indices=ValueConverter.to_string_array(index)
        )
        if opts.filter_cache:
            request.filter_cache = opts.filter_cache
        if opts.field_data_cache:
            request.field_data_cache = opts.field_data_cache
        if opts.id_cache:
            request.id_cache = opts.id_cache
        if opts.fields:
            request.fields = ValueConverter.to_string_array(opts.fields)
        return request

    @staticmethod
    def convert_stats(
        options: Mapping | StatsOptions | None = None,
    ) -> IndicesStatsRequest:
        request = IndicesStatsRequest()
        if options is None:
            request.all()
            return request
        opts = Helper.get_options(options, StatsOptions)
        for flag in STATS_FLAGS:
            value = getattr(opts, flag)
            if value:
                setattr(request, flag, value)
        if opts.types:
            request.types = ValueConverter.to_string_array(opts.types)
        if opts.groups:
            request.groups = ValueConverter.to_string_array(opts.groups)
        return request

    @staticmethod
    def convert_status(
        index: Any,
        options: Mapping | StatusOptions | None = None,
    ) -> IndicesStatusRequest:
        opts = Helper.get_options(options, StatusOptions)
        request = IndicesStatusRequest(
            indices=ValueConverter.to_string_array(index)
        )
        if opts.recovery:
            request.recovery = opts.recovery
        if opts.snapshot:
            request.snapshot = opts.snapshot
        return request

    @staticmethod
    def convert_segments(index: Any) -> IndicesSegmentsRequest:
        return IndicesSegmentsRequest(
            indices=ValueConverter.to_string_array(index)
        )

    @staticmethod
    def convert_aliases(
        ops: Iterable[Mapping],
        options: Mapping | AliasesOptions | None = None,
    ) -> IndicesAliasesRequest:
        """Convert alias operations to an aliases request.

        Args:
            ops:
                Operations, each either {"add": {"index", "alias", "filter"}}
                or {"remove": {"index", "alias"}}.
            options:
                Aliases options.

        Returns:
            Aliases request.
        """
        opts = Helper.get_options(options, AliasesOptions)
        request = IndicesAliasesRequest()
        for op in ops:
            add = Helper.get_field(op, "add")
            remove = Helper.get_field(op, "remove")
            if add:
                filter = Helper.get_field(add, "filter")
                request.add_alias(
                    index=Helper.get_id(Helper.get_field(add, "index")),
                    alias=Helper.get_id(Helper.get_field(add, "alias")),
                    filter=(
                        ValueConverter.stringify_keys(filter)
                        if filter
                        else None
                    ),
                )
            if remove:
                request.remove_alias(
                    index=Helper.get_id(Helper.get_field(remove, "index")),
                    alias=Helper.get_id(Helper.get_field(remove, "alias")),
                )
        if opts.timeout:
            request.timeout = opts.timeout
        return request

    @staticmethod
    def convert_put_template(
        name: Any,
        options: Mapping | TemplateOptions | None = None,
    ) -> PutIndexTemplateRequest:
        opts = Helper.get_options(options, TemplateOptions)
        request = PutIndexTemplateRequest(
            name=ValueConverter.key_name(name),
            template=opts.template,
        )
        if opts.settings:
            request.settings = to_settings(opts.settings)
        if opts.mappings:
            OperationConverter._apply_mappings(request, opts.mappings)
        if opts.order:
            request.order = opts.order
        return request

    @staticmethod
    def convert_create_template(
        name: Any,
        options: Mapping | TemplateOptions | None = None,
    ) -> PutIndexTemplateRequest:
        request = OperationConverter.convert_put_template(name, options)
        request.create = True
        return request

    @staticmethod
    def convert_delete_template(name: Any) -> DeleteIndexTemplateRequest:
        return DeleteIndexTemplateRequest(name=ValueConverter.key_name(name))

    @staticmethod
    def _apply_mappings(
        request: CreateIndexRequest | PutIndexTemplateRequest,
        mappings: Mapping,
    ) -> None:
        for type, mapping in ValueConverter.stringify_keys(mappings).items():
            request.mapping(type, ValueConverter.stringify_keys(mapping))


class ResultConverter:
    @staticmethod
    def convert(response: NativeResponse) -> Any:
        """Convert any typed response with its matching converter."""
        for cls in type(response).__mro__:
            converter = _RESULT_CONVERTERS.get(cls)
            if converter is not None:
                return converter(response)
        raise TypeError(f"No converter for {type(response).__name__}")

    @staticmethod
    def convert_index(response: IndexResponse) -> dict[str, Any]:
        # underscored aliases match REST API responses
        return {
            "index": response.index,
            "_index": response.index,
            "id": response.id,
            "_id": response.id,
            "type": response.type,
            "_type": response.type,
            "version": response.version,
            "_version": response.version,
            "matches": response.matches,
        }

    @staticmethod
    def convert_get(response: GetResponse) -> dict[str, Any]:
        source = ResultConverter._convert_source(response.source)
        return {
            "exists?": response.exists,
            "exists": response.exists,
            "index": response.index,
            "_index": response.index,
            "type": response.type,
            "_type": response.type,
            "id": response.id,
            "_id": response.id,
            "version": response.version,
            "_version": response.version,
            "empty?": response.is_source_empty,
            "source": source,
            "_source": source,
            "fields": ValueConverter.as_generic(response.fields or {}),
        }

    @staticmethod
    def convert_multi_get_item(item: MultiGetItemResponse) -> dict[str, Any]:
        if item.failure is not None or item.response is None:
            return {
                "exists": False,
                "_index": item.index,
                "_type": item.type,
                "_id": item.id,
                "_version": None,
                "_source": {},
                "error": (
                    ValueConverter.as_generic(item.failure.message)
                    if item.failure is not None
                    else None
                ),
            }
        response = item.response
        return {
            "exists": response.exists,
            "_index": response.index,
            "_type": response.type,
            "_id": response.id,
            "_version": response.version,
            "_source": ResultConverter._convert_source(response.source),
        }

    @staticmethod
    def convert_multi_get(response: MultiGetResponse) -> Iterator[dict]:
        return (
            ResultConverter.convert_multi_get_item(item)
            for item in response.responses
        )

    @staticmethod
    def convert_count(response: CountResponse) -> dict[str, Any]:
        return {
            "count": response.count,
            "_shards": {
                "total": response.total_shards,
                "successful": response.successful_shards,
                "failed": response.failed_shards,
            },
        }

    @staticmethod
    def convert_delete(response: DeleteResponse) -> dict[str, Any]:
        # matches REST API responses
        return {
            "found": not response.not_found,
            "found?": not response.not_found,
            "_index": response.index,
            "_type": response.type,
            "_version": response.version,
            "_id": response.id,
            "ok": True,
        }

    @staticmethod
    def convert_search_hit(hit: SearchHit) -> dict[str, Any]:
        return {
            "_index": hit.index,
            "_type": hit.type,
            "_id": hit.id,
            "_score": hit.score,
            "_version": hit.version,
            "_source": ValueConverter.as_generic(hit.source),
        }

    @staticmethod
    def convert_search_hits(hits: SearchHits) -> dict[str, Any]:
        return {
            "total": hits.total,
            "max_score": hits.max_score,
            "hits": [ResultConverter.convert_search_hit(h) for h in hits.hits],
        }

    @staticmethod
    def convert_search(response: SearchResponse) -> dict[str, Any]:
        # facets and suggestions are not converted
        return {
            "took": response.took,
            "timed_out": response.timed_out,
            "_scroll_id": response.scroll_id,
            "_shards": {
                "total": response.total_shards,
                "successful": response.successful_shards,
                "failed": response.failed_shards,
            },
            "hits": ResultConverter.convert_search_hits(response.hits),
        }

    @staticmethod
    def convert_shard_failure(failure: ShardFailure) -> dict[str, Any]:
        return {
            "index": failure.index,
            "shard-id": failure.shard_id,
            "reason": ValueConverter.as_generic(failure.reason),
        }

    @staticmethod
    def convert_broadcast(response: BroadcastResponse) -> dict[str, Any]:
        # matches REST API responses
        return {
            "_shards": {
                "total": response.total_shards,
                "successful": response.successful_shards,
                "failed": response.failed_shards,
                "failures": [
                    ResultConverter.convert_shard_failure(f)
                    for f in response.shard_failures
                ],
            }
        }

    @staticmethod
    def convert_acknowledged(response: AcknowledgedResponse) -> dict[str, Any]:
        return {"ok": True, "acknowledged": response.acknowledged}

    @staticmethod
    def convert_index_exists(
        response: IndicesExistsResponse,
    ) -> dict[str, Any]:
        return {"exists": response.exists}

    @staticmethod
    def convert_indices_stats(
        response: IndicesStatsResponse,
    ) -> dict[str, Any]:
        result = ResultConverter.convert_broadcast(response)
        result["_all"] = ValueConverter.as_generic(response.totals or {})
        result["indices"] = ValueConverter.as_generic(response.indices or {})
        return result

    @staticmethod
    def convert_indices_status(
        response: IndicesStatusResponse,
    ) -> dict[str, Any]:
        result = ResultConverter.convert_broadcast(response)
        result["indices"] = ValueConverter.as_generic(response.indices or {})
        return result

    @staticmethod
    def convert_shard_segments(shard: ShardSegments) -> dict[str, Any]:
        return {
            "routing": ValueConverter.as_generic(shard.routing),
            "num_committed_segments": shard.num_committed_segments,
            "num_search_segments": shard.num_search_segments,
            "segments": {
                name: segment.to_dict()
                for name, segment in shard.segments.items()
            },
        }

    @staticmethod
    def convert_index_segments(
        index: str, segments: IndexSegments
    ) -> dict[str, Any]:
        return {
            "index": index,
            "shards": {
                shard_id: [
                    ResultConverter.convert_shard_segments(shard)
                    for shard in shards
                ]
                for shard_id, shards in segments.shards.items()
            },
        }

    @staticmethod
    def convert_indices_segments(
        response: IndicesSegmentResponse,
    ) -> dict[str, Any]:
        return {
            index: ResultConverter.convert_index_segments(index, segments)
            for index, segments in response.indices.items()
        }

    @staticmethod
    def _convert_source(source: Mapping | None) -> dict[str, Any]:
        if source is None:
            return {}
        return ValueConverter.as_generic(source)


_RESULT_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    IndexResponse: ResultConverter.convert_index,
    GetResponse: ResultConverter.convert_get,
    MultiGetResponse: ResultConverter.convert_multi_get,
    CountResponse: ResultConverter.convert_count,
    DeleteResponse: ResultConverter.convert_delete,
    SearchResponse: ResultConverter.convert_search,
    AcknowledgedResponse: ResultConverter.convert_acknowledged,
    IndicesExistsResponse: ResultConverter.convert_index_exists,
    IndicesStatsResponse: ResultConverter.convert_indices_stats,
    IndicesStatusResponse: ResultConverter.convert_indices_status,
    IndicesSegmentResponse: ResultConverter.convert_indices_segments,
    BroadcastResponse: ResultConverter.convert_broadcast,
}
