from enum import Enum

import pytest
from pydantic import ValidationError

from esbridge.native import (
    EMPTY_SETTINGS,
    ContentType,
    IndexOptions,
    OperationConverter,
    VersionType,
)

from ._data import documents


class Field(Enum):
    TITLE = "title"
    ROUTING = "routing"


def test_index_request():
    request = OperationConverter.convert_index(
        "articles",
        "article",
        {"title": "ElasticSearch"},
        {"id": "1", "refresh": True},
    )
    assert request.index == "articles"
    assert request.type == "article"
    assert request.source == {"title": "ElasticSearch"}
    assert request.id == "1"
    assert request.refresh is True
    assert request.routing is None
    assert request.parent is None
    assert request.ttl is None
    assert request.op_type == "index"
    assert request.content_type is ContentType.JSON
    assert request.version_type is VersionType.INTERNAL


def test_index_request_all_options():
    request = OperationConverter.convert_index(
        "articles",
        "article",
        documents[0],
        {
            "id": 1,
            "routing": "user-1",
            "parent": "7",
            "timestamp": "2012-03-26T06:07:00",
            "ttl": "1d",
            "op-type": "CREATE",
            "refresh": True,
            "version-type": "External",
            "percolate": "*",
            "content-type": "smile",
        },
    )
    assert request.id == "1"
    assert request.routing == "user-1"
    assert request.parent == "7"
    assert request.timestamp == "2012-03-26T06:07:00"
    assert request.ttl == "1d"
    assert request.op_type == "create"
    assert request.refresh is True
    assert request.version_type is VersionType.EXTERNAL
    assert request.percolate == "*"
    assert request.content_type is ContentType.SMILE

    call = request.to_rest()
    assert call.method == "PUT"
    assert call.path == "/articles/article/1"
    assert call.params == {
        "routing": "user-1",
        "parent": "7",
        "timestamp": "2012-03-26T06:07:00",
        "ttl": "1d",
        "op_type": "create",
        "refresh": "true",
        "version_type": "external",
        "percolate": "*",
    }
    assert call.headers["content-type"] == "application/smile"
    assert call.body == documents[0]


INDEX_OPTION_FIELDS = [
    "id",
    "routing",
    "parent",
    "timestamp",
    "ttl",
    "op_type",
    "refresh",
    "version_type",
    "percolate",
    "content_type",
]


@pytest.mark.parametrize(
    "options",
    [
        None,
        {},
        {"refresh": False, "routing": None, "op_type": "", "ttl": 0},
        IndexOptions(refresh=False),
    ],
)
def test_index_request_falsy_options_keep_defaults(options):
    request = OperationConverter.convert_index(
        "articles", "article", {"title": "ElasticSearch"}, options
    )
    for field in INDEX_OPTION_FIELDS:
        assert getattr(request, field) == request.get_default_value(field)
    call = request.to_rest()
    assert call.method == "POST"
    assert call.path == "/articles/article"
    assert call.params == {}


def test_index_request_stringifies_top_level_keys():
    nested = {Field.TITLE: "nested"}
    request = OperationConverter.convert_index(
        "articles", "article", {Field.TITLE: "ElasticSearch", "obj": nested}
    )
    assert request.source["title"] == "ElasticSearch"
    assert request.source["obj"] == nested


def test_index_request_rejects_scalar_options():
    with pytest.raises(TypeError):
        OperationConverter.convert_index(
            "articles", "article", {}, "refresh"  # type: ignore[arg-type]
        )


def test_index_request_rejects_malformed_option_value():
    with pytest.raises(ValidationError):
        OperationConverter.convert_index(
            "articles", "article", {}, {"refresh": {"now": True}}
        )


def test_get_request():
    request = OperationConverter.convert_get(
        "articles",
        "article",
        "1",
        {
            "parent": "7",
            "preference": "_local",
            "routing": "user-1",
            "fields": ("title", "url"),
        },
    )
    assert request.parent == "7"
    assert request.preference == "_local"
    assert request.routing == "user-1"
    assert request.fields == ["title", "url"]
    call = request.to_rest()
    assert call.method == "GET"
    assert call.path == "/articles/article/1"
    assert call.params == {
        "routing": "user-1",
        "parent": "7",
        "preference": "_local",
        "fields": "title,url",
    }

    request = OperationConverter.convert_get("articles", "article", "1")
    assert request.fields is None
    assert request.to_rest().params == {}


def test_multi_get_request():
    request = OperationConverter.convert_multi_get(
        [
            {"_index": "articles", "_type": "article", "_id": "1"},
            {"_index": "people", "_type": "person", "_id": 2},
        ],
        {"preference": "_primary", "refresh": True, "realtime": False},
    )
    assert [(i.index, i.type, i.id) for i in request.items] == [
        ("articles", "article", "1"),
        ("people", "person", "2"),
    ]
    assert request.preference == "_primary"
    assert request.refresh is True
    assert request.realtime is True
    call = request.to_rest()
    assert call.path == "/_mget"
    assert call.body == {
        "docs": [
            {"_index": "articles", "_type": "article", "_id": "1"},
            {"_index": "people", "_type": "person", "_id": "2"},
        ]
    }
    assert call.params == {"preference": "_primary", "refresh": "true"}


def test_count_request():
    request = OperationConverter.convert_count(
        "articles",
        ["article", "post"],
        {
            "query": {"term": {"language": "english"}},
            "min-score": 0.5,
            "routing": "user-1",
        },
    )
    assert request.indices == ["articles"]
    assert request.types == ["article", "post"]
    assert request.query == {"term": {"language": "english"}}
    assert request.min_score == 0.5
    assert request.routing == ["user-1"]
    call = request.to_rest()
    assert call.path == "/articles/article,post/_count"
    assert call.params == {"min_score": "0.5", "routing": "user-1"}
    assert call.body == {"query": {"term": {"language": "english"}}}

    request = OperationConverter.convert_count(["articles", "people"])
    assert request.types == []
    assert request.query is None
    assert request.to_rest().path == "/articles,people/_count"


def test_count_request_with_options_in_type_position():
    request = OperationConverter.convert_count(
        "articles", {"query": {"match_all": {}}, "min_score": 1.5}
    )
    assert request.indices == ["articles"]
    assert request.types == []
    assert request.query == {"match_all": {}}
    assert request.min_score == 1.5
    call = request.to_rest()
    assert call.path == "/articles/_count"
    assert call.body == {"query": {"match_all": {}}}


def test_delete_request():
    request = OperationConverter.convert_delete(
        "articles",
        "article",
        "1",
        {
            "routing": "user-1",
            "refresh": True,
            "version": 3,
            "version_type": "external",
            "parent": "7",
        },
    )
    assert request.routing == "user-1"
    assert request.refresh is True
    assert request.version == 3
    assert request.version_type is VersionType.EXTERNAL
    assert request.parent == "7"
    call = request.to_rest()
    assert call.method == "DELETE"
    assert call.path == "/articles/article/1"
    assert call.params["version"] == "3"

    request = OperationConverter.convert_delete("articles", "article", "1")
    assert request.version is None
    assert request.refresh is False


def test_search_request_removes_control_keys():
    request = OperationConverter.convert_search(
        "articles",
        "article",
        {
            "query": {"match_all": {}},
            "search-type": "count",
            "scroll": "1m",
        },
    )
    assert request.source == {"query": {"match_all": {}}}
    assert request.search_type == "count"
    assert request.scroll == "1m"
    call = request.to_rest()
    assert call.path == "/articles/article/_search"
    assert call.params == {"search_type": "count", "scroll": "1m"}
    assert call.body == {"query": {"match_all": {}}}


@pytest.mark.parametrize(
    "options,expected",
    [
        ({"search-type": "count", "search_type": "scan"}, "count"),
        ({"search-type": None, "search_type": "scan"}, "scan"),
        ({"search_type": "dfs_query_then_fetch"}, "dfs_query_then_fetch"),
        ({}, None),
    ],
)
def test_search_request_search_type(options, expected):
    request = OperationConverter.convert_search("articles", None, options)
    assert request.search_type == expected
    assert "search-type" not in request.source
    assert "search_type" not in request.source


def test_search_request_routing_and_preference():
    request = OperationConverter.convert_search(
        ["articles", "people"],
        None,
        {
            Field.ROUTING: "user-1",
            "preference": "_local",
            "size": 10,
            Field.TITLE: "ignored-by-node",
        },
    )
    assert request.indices == ["articles", "people"]
    assert request.types == []
    assert request.routing == "user-1"
    assert request.preference == "_local"
    assert request.source == {"size": 10, "title": "ignored-by-node"}
    assert request.to_rest().path == "/articles,people/_search"


def test_search_request_multiple_routing_values():
    request = OperationConverter.convert_search(
        "articles", None, {"routing": ["user-1", "user-2"]}
    )
    assert request.routing == "user-1,user-2"
    assert request.source == {}
    assert request.to_rest().params == {"routing": "user-1,user-2"}


def test_search_request_without_index():
    request = OperationConverter.convert_search(None, None, None)
    assert request.indices == []
    assert request.source == {}
    assert request.to_rest().path == "/_search"


def test_search_scroll_request():
    request = OperationConverter.convert_search_scroll(
        "c2Nhbjs1OzE", {"scroll": "5m"}
    )
    assert request.scroll_id == "c2Nhbjs1OzE"
    assert request.scroll == "5m"
    call = request.to_rest()
    assert call.path == "/_search/scroll"
    assert call.params == {"scroll": "5m", "scroll_id": "c2Nhbjs1OzE"}

    request = OperationConverter.convert_search_scroll("c2Nhbjs1OzE")
    assert request.scroll is None


def test_create_index_request():
    request = OperationConverter.convert_create_index(
        "articles",
        {
            "settings": {"number_of_shards": 1},
            "mappings": {
                "article": {"properties": {"title": {"type": "string"}}}
            },
        },
    )
    assert request.index == "articles"
    assert request.settings["number_of_shards"] == "1"
    assert request.mappings == {
        "article": {"properties": {"title": {"type": "string"}}}
    }
    call = request.to_rest()
    assert call.method == "PUT"
    assert call.path == "/articles"
    assert call.body == {
        "settings": {"number_of_shards": "1"},
        "mappings": {
            "article": {"properties": {"title": {"type": "string"}}}
        },
    }

    request = OperationConverter.convert_create_index("articles")
    assert request.settings is EMPTY_SETTINGS
    assert request.mappings == {}
    assert request.to_rest().body is None


def test_update_settings_request():
    request = OperationConverter.convert_update_settings(
        ["articles", "people"], {"index": {"refresh_interval": "1s"}}
    )
    assert request.indices == ["articles", "people"]
    call = request.to_rest()
    assert call.path == "/articles,people/_settings"
    assert call.body == {"index.refresh_interval": "1s"}


@pytest.mark.parametrize(
    "convert,method,suffix",
    [
        (OperationConverter.convert_index_exists, "HEAD", None),
        (OperationConverter.convert_delete_index, "DELETE", None),
        (OperationConverter.convert_open_index, "POST", "_open"),
        (OperationConverter.convert_close_index, "POST", "_close"),
        (OperationConverter.convert_refresh, "POST", "_refresh"),
        (
            OperationConverter.convert_gateway_snapshot,
            "POST",
            "_gateway/snapshot",
        ),
        (OperationConverter.convert_segments, "GET", "_segments"),
    ],
)
@pytest.mark.parametrize(
    "index,path",
    [
        ("articles", "/articles"),
        (["articles", "people"], "/articles,people"),
    ],
)
def test_index_requests(convert, method, suffix, index, path):
    request = convert(index)
    assert request.indices == (
        [index] if isinstance(index, str) else list(index)
    )
    call = request.to_rest()
    assert call.method == method
    assert call.path == (f"{path}/{suffix}" if suffix else path)


def test_optimize_request():
    request = OperationConverter.convert_optimize(
        "articles",
        {
            "wait-for-merge": True,
            "max-num-segments": 1,
            "only-expunge-deletes": True,
            "flush": False,
            "refresh": False,
        },
    )
    assert request.max_num_segments == 1
    assert request.only_expunge_deletes is True
    # false never overrides a default that is on
    assert request.flush is True
    assert request.refresh is True
    call = request.to_rest()
    assert call.path == "/articles/_optimize"
    assert call.params == {
        "max_num_segments": "1",
        "only_expunge_deletes": "true",
    }


def test_flush_request():
    request = OperationConverter.convert_flush(
        "articles", {"refresh": True, "force": True, "full": True}
    )
    assert (request.refresh, request.force, request.full) == (
        True,
        True,
        True,
    )
    assert request.to_rest().params == {
        "refresh": "true",
        "force": "true",
        "full": "true",
    }

    request = OperationConverter.convert_flush("articles")
    assert (request.refresh, request.force, request.full) == (
        False,
        False,
        False,
    )


def test_clear_cache_request():
    request = OperationConverter.convert_clear_cache(
        "articles",
        {
            "filter-cache": True,
            "field-data-cache": True,
            "id-cache": False,
            "fields": "title",
        },
    )
    assert request.filter_cache is True
    assert request.field_data_cache is True
    assert request.id_cache is False
    assert request.fields == ["title"]
    call = request.to_rest()
    assert call.path == "/articles/_cache/clear"
    assert call.params == {
        "filter": "true",
        "field_data": "true",
        "fields": "title",
    }


def test_stats_request_without_options_requests_all():
    request = OperationConverter.convert_stats()
    for flag in (
        "docs",
        "store",
        "indexing",
        "get",
        "search",
        "merge",
        "flush",
        "refresh",
    ):
        assert getattr(request, flag) is True
    call = request.to_rest()
    assert call.path == "/_stats"
    # flags that are on by default are not sent
    assert call.params == {
        "merge": "true",
        "flush": "true",
        "refresh": "true",
    }


def test_stats_request():
    request = OperationConverter.convert_stats(
        {"merge": True, "types": ["article"], "groups": "group1"}
    )
    assert request.merge is True
    assert request.flush is False
    assert request.docs is True
    assert request.types == ["article"]
    assert request.groups == ["group1"]
    assert request.to_rest().params == {
        "merge": "true",
        "types": "article",
        "groups": "group1",
    }


def test_status_request():
    request = OperationConverter.convert_status(
        "articles", {"recovery": True}
    )
    assert request.recovery is True
    assert request.snapshot is False
    call = request.to_rest()
    assert call.path == "/articles/_status"
    assert call.params == {"recovery": "true"}


def test_aliases_request():
    request = OperationConverter.convert_aliases(
        [
            {
                "add": {
                    "index": "articles",
                    "alias": "english",
                    "filter": {"term": {"language": "english"}},
                }
            },
            {"add": {"index": "articles", "alias": "all"}},
            {"remove": {"index": "people", "alias": "all"}},
        ],
        {"timeout": "5s"},
    )
    assert [(a.action, a.index, a.alias) for a in request.actions] == [
        ("add", "articles", "english"),
        ("add", "articles", "all"),
        ("remove", "people", "all"),
    ]
    assert request.timeout == "5s"
    call = request.to_rest()
    assert call.path == "/_aliases"
    assert call.params == {"timeout": "5s"}
    assert call.body == {
        "actions": [
            {
                "add": {
                    "index": "articles",
                    "alias": "english",
                    "filter": {"term": {"language": "english"}},
                }
            },
            {"add": {"index": "articles", "alias": "all"}},
            {"remove": {"index": "people", "alias": "all"}},
        ]
    }


def test_put_template_request():
    request = OperationConverter.convert_put_template(
        "articles",
        {
            "template": "article*",
            "settings": {"number_of_shards": 1},
            "mappings": {"article": {"_source": {"enabled": False}}},
            "order": 2,
        },
    )
    assert request.name == "articles"
    assert request.template == "article*"
    assert request.settings["number_of_shards"] == "1"
    assert request.mappings == {"article": {"_source": {"enabled": False}}}
    assert request.order == 2
    assert request.create is False
    call = request.to_rest()
    assert call.method == "PUT"
    assert call.path == "/_template/articles"
    assert call.params == {}
    assert call.body == {
        "template": "article*",
        "order": 2,
        "settings": {"number_of_shards": "1"},
        "mappings": {"article": {"_source": {"enabled": False}}},
    }


def test_create_template_request():
    request = OperationConverter.convert_create_template(
        "articles", {"template": "article*"}
    )
    assert request.create is True
    assert request.order == 0
    assert request.to_rest().params == {"create": "true"}


def test_delete_template_request():
    call = OperationConverter.convert_delete_template("articles").to_rest()
    assert call.method == "DELETE"
    assert call.path == "/_template/articles"
