from ._coercion import ValueConverter
from ._executor import Executor
from ._helper import Helper
from ._models import (
    EMPTY_SETTINGS,
    AliasesOptions,
    ClearCacheOptions,
    ContentType,
    CountOptions,
    CreateIndexOptions,
    DeleteOptions,
    FlushOptions,
    GetOptions,
    IndexOptions,
    LocalTransportAddress,
    MultiGetOptions,
    OptimizeOptions,
    ScrollOptions,
    Settings,
    SocketTransportAddress,
    StatsOptions,
    StatusOptions,
    TemplateOptions,
    VersionType,
    to_content_type,
    to_local_address,
    to_settings,
    to_socket_address,
    to_version_type,
)
from ._requests import (
    AliasAction,
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
    MultiGetItem,
    MultiGetRequest,
    NativeRequest,
    OpenIndexRequest,
    OptimizeRequest,
    PutIndexTemplateRequest,
    RefreshRequest,
    RestCall,
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
    MultiGetFailure,
    MultiGetItemResponse,
    MultiGetResponse,
    NativeResponse,
    SearchHit,
    SearchHits,
    SearchResponse,
    Segment,
    ShardFailure,
    ShardSegments,
    ShardsInfo,
)
from .conversion import OperationConverter, ResultConverter

__all__ = [
    "EMPTY_SETTINGS",
    "AcknowledgedResponse",
    "AliasAction",
    "AliasesOptions",
    "BroadcastResponse",
    "ClearCacheOptions",
    "ClearIndicesCacheRequest",
    "CloseIndexRequest",
    "ContentType",
    "CountOptions",
    "CountRequest",
    "CountResponse",
    "CreateIndexOptions",
    "CreateIndexRequest",
    "DeleteIndexRequest",
    "DeleteIndexTemplateRequest",
    "DeleteOptions",
    "DeleteRequest",
    "DeleteResponse",
    "Executor",
    "FlushOptions",
    "FlushRequest",
    "GatewaySnapshotRequest",
    "GetOptions",
    "GetRequest",
    "GetResponse",
    "Helper",
    "IndexOptions",
    "IndexRequest",
    "IndexResponse",
    "IndexSegments",
    "IndicesAliasesRequest",
    "IndicesExistsRequest",
    "IndicesExistsResponse",
    "IndicesSegmentResponse",
    "IndicesSegmentsRequest",
    "IndicesStatsRequest",
    "IndicesStatsResponse",
    "IndicesStatusRequest",
    "IndicesStatusResponse",
    "LocalTransportAddress",
    "MultiGetFailure",
    "MultiGetItem",
    "MultiGetItemResponse",
    "MultiGetOptions",
    "MultiGetRequest",
    "MultiGetResponse",
    "NativeRequest",
    "NativeResponse",
    "OpenIndexRequest",
    "OperationConverter",
    "OptimizeOptions",
    "OptimizeRequest",
    "PutIndexTemplateRequest",
    "RefreshRequest",
    "RestCall",
    "ResultConverter",
    "ScrollOptions",
    "SearchHit",
    "SearchHits",
    "SearchRequest",
    "SearchResponse",
    "SearchScrollRequest",
    "Segment",
    "Settings",
    "ShardFailure",
    "ShardSegments",
    "ShardsInfo",
    "SocketTransportAddress",
    "StatsOptions",
    "StatusOptions",
    "TemplateOptions",
    "UpdateSettingsRequest",
    "ValueConverter",
    "VersionType",
    "to_content_type",
    "to_local_address",
    "to_settings",
    "to_socket_address",
    "to_version_type",
]
