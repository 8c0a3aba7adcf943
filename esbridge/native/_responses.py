"""
Typed responses, parsed from the node's JSON response bodies.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import AliasChoices, field_validator

from esbridge.core import DataModel, DataModelField


class NativeResponse(DataModel):
    """Native response."""

    @classmethod
    def from_native(cls, obj: Any) -> Self:
        """Build the response from a client response or a decoded body."""
        body = getattr(obj, "body", obj)
        return cls.from_dict(body)


class ShardFailure(DataModel):
    """Shard level failure of a broadcast operation."""

    index: str | None = None
    """Index name."""

    shard_id: int | None = DataModelField(alias="shard", default=None)
    """Shard id."""

    reason: Any = None
    """Failure reason."""


class ShardsInfo(DataModel):
    """Shard statistics."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    failures: list[ShardFailure] = []


class BroadcastResponse(NativeResponse):
    """Response of an operation broadcast to shards."""

    shards: ShardsInfo = DataModelField(
        alias="_shards", default_factory=ShardsInfo
    )
    """Shard statistics."""

    @property
    def total_shards(self) -> int:
        return self.shards.total

    @property
    def successful_shards(self) -> int:
        return self.shards.successful

    @property
    def failed_shards(self) -> int:
        return self.shards.failed

    @property
    def shard_failures(self) -> list[ShardFailure]:
        return self.shards.failures


class IndexResponse(NativeResponse):
    """Index response."""

    index: str = DataModelField(alias="_index")
    type: str | None = DataModelField(alias="_type", default=None)
    id: str = DataModelField(alias="_id")
    version: int | None = DataModelField(alias="_version", default=None)

    matches: list[str] | None = None
    """Matching percolator queries."""


class GetResponse(NativeResponse):
    """Get response."""

    index: str = DataModelField(alias="_index")
    type: str | None = DataModelField(alias="_type", default=None)
    id: str = DataModelField(alias="_id")
    version: int | None = DataModelField(alias="_version", default=None)

    exists: bool = DataModelField(
        default=False, validation_alias=AliasChoices("exists", "found")
    )
    """A value indicating whether the document exists."""

    source: dict[str, Any] | None = DataModelField(
        alias="_source", default=None
    )
    """Document source."""

    fields: dict[str, Any] | None = None
    """Stored fields."""

    @property
    def is_source_empty(self) -> bool:
        return not self.source


class MultiGetFailure(DataModel):
    """Multi-get item failure."""

    message: Any = None


class MultiGetItemResponse(DataModel):
    """Multi-get item, either a get response or a failure."""

    index: str | None = DataModelField(alias="_index", default=None)
    type: str | None = DataModelField(alias="_type", default=None)
    id: str | None = DataModelField(alias="_id", default=None)
    response: GetResponse | None = None
    failure: MultiGetFailure | None = None

    @property
    def is_failed(self) -> bool:
        return self.failure is not None

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        obj = obj or {}
        item = cls(
            index=obj.get("_index"),
            type=obj.get("_type"),
            id=obj.get("_id"),
        )
        if "error" in obj:
            item.failure = MultiGetFailure(message=obj["error"])
        else:
            item.response = GetResponse.from_dict(obj)
        return item


class MultiGetResponse(NativeResponse):
    """Multi-get response."""

    responses: list[MultiGetItemResponse] = []

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        docs = (obj or {}).get("docs", [])
        return cls(
            responses=[MultiGetItemResponse.from_dict(doc) for doc in docs]
        )


class CountResponse(BroadcastResponse):
    """Count response."""

    count: int = 0


class DeleteResponse(NativeResponse):
    """Delete response."""

    index: str = DataModelField(alias="_index")
    type: str | None = DataModelField(alias="_type", default=None)
    id: str = DataModelField(alias="_id")
    version: int | None = DataModelField(alias="_version", default=None)

    not_found: bool = False
    """A value indicating whether the document was missing."""

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        obj = dict(obj or {})
        if "not_found" not in obj and "found" in obj:
            obj["not_found"] = not obj["found"]
        return super().from_dict(obj)


class SearchHit(DataModel):
    """Search hit."""

    index: str | None = DataModelField(alias="_index", default=None)
    type: str | None = DataModelField(alias="_type", default=None)
    id: str | None = DataModelField(alias="_id", default=None)
    score: float | None = DataModelField(alias="_score", default=None)
    version: int | None = DataModelField(alias="_version", default=None)
    source: dict[str, Any] | None = DataModelField(
        alias="_source", default=None
    )


class SearchHits(DataModel):
    """Search hits."""

    total: int = 0
    max_score: float | None = None
    hits: list[SearchHit] = []

    @field_validator("total", mode="before")
    @classmethod
    def convert_total(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("value", 0)
        return value


class SearchResponse(BroadcastResponse):
    """Search response."""

    took: int = 0
    """Took in milliseconds."""

    timed_out: bool = False

    scroll_id: str | None = DataModelField(alias="_scroll_id", default=None)
    """Scroll id of a scrolled search."""

    hits: SearchHits = DataModelField(default_factory=SearchHits)


class AcknowledgedResponse(NativeResponse):
    """Response of an acknowledged cluster level operation."""

    acknowledged: bool = False


class IndicesExistsResponse(NativeResponse):
    """Indices exists response."""

    exists: bool = False

    @classmethod
    def from_native(cls, obj: Any) -> Self:
        body = getattr(obj, "body", obj)
        if isinstance(body, bool):
            return cls(exists=body)
        return cls.from_dict(body)


class IndicesStatsResponse(BroadcastResponse):
    """Indices stats response."""

    totals: dict[str, Any] | None = DataModelField(alias="_all", default=None)
    """Stats summed over all indices."""

    indices: dict[str, Any] | None = None
    """Stats per index."""


class IndicesStatusResponse(BroadcastResponse):
    """Indices status response."""

    indices: dict[str, Any] | None = None
    """Status per index."""


class Segment(DataModel):
    """Lucene segment."""

    generation: int | None = None
    num_docs: int | None = None
    deleted_docs: int | None = None
    size_in_bytes: int | None = None
    memory_in_bytes: int | None = None
    committed: bool | None = None
    search: bool | None = None
    version: str | None = None
    compound: bool | None = None


class ShardSegments(DataModel):
    """Segments of a shard copy."""

    routing: dict[str, Any] | None = None
    num_committed_segments: int | None = None
    num_search_segments: int | None = None
    segments: dict[str, Segment] = {}


class IndexSegments(DataModel):
    """Segments of an index, keyed by shard id."""

    shards: dict[str, list[ShardSegments]] = {}


class IndicesSegmentResponse(BroadcastResponse):
    """Indices segments response."""

    indices: dict[str, IndexSegments] = {}
