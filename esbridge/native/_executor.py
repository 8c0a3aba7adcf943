"""
Execution of typed requests on an elasticsearch client.
"""

from __future__ import annotations

from typing import Any

from elasticsearch import AsyncElasticsearch
from elasticsearch import Elasticsearch as SyncElasticsearch
from elasticsearch.exceptions import NotFoundError as ESNotFoundError

from esbridge.core import debug

from ._requests import NativeRequest, RestCall
from ._responses import NativeResponse


class Executor:
    """Issue typed requests through an already constructed client.

    Connection setup, retries and timeouts belong to the client.
    """

    client: SyncElasticsearch | None
    aclient: AsyncElasticsearch | None

    def __init__(
        self,
        client: SyncElasticsearch | None = None,
        aclient: AsyncElasticsearch | None = None,
    ):
        """Initialize.

        Args:
            client:
                Elasticsearch client used by execute.
            aclient:
                Async Elasticsearch client used by aexecute.
        """
        self.client = client
        self.aclient = aclient

    def execute(self, request: NativeRequest) -> NativeResponse:
        if self.client is None:
            raise ValueError("Executor has no sync client")
        call = request.to_rest()
        debug("%s %s %s", call.method, call.path, call.params)
        try:
            resp = self.client.perform_request(**self._get_args(call))
        except ESNotFoundError as e:
            return self._convert_not_found(request, call, e)
        return request.response_type.from_native(resp)

    async def aexecute(self, request: NativeRequest) -> NativeResponse:
        if self.aclient is None:
            raise ValueError("Executor has no async client")
        call = request.to_rest()
        debug("%s %s %s", call.method, call.path, call.params)
        try:
            resp = await self.aclient.perform_request(**self._get_args(call))
        except ESNotFoundError as e:
            return self._convert_not_found(request, call, e)
        return request.response_type.from_native(resp)

    def _get_args(self, call: RestCall) -> dict[str, Any]:
        def _add_if_not_empty(key, value):
            return {key: value} if value else {}

        args = {
            "method": call.method,
            "path": call.path,
            **_add_if_not_empty("params", call.params),
            **_add_if_not_empty("headers", call.headers),
        }
        if call.body is not None:
            args["body"] = call.body
        return args

    def _convert_not_found(
        self,
        request: NativeRequest,
        call: RestCall,
        e: ESNotFoundError,
    ) -> NativeResponse:
        if call.method == "HEAD":
            return request.response_type.from_native(False)
        if (
            request.parse_not_found
            and isinstance(e.body, dict)
            and ("found" in e.body or "_id" in e.body)
        ):
            return request.response_type.from_native(e.body)
        raise e
