"""
Marshalling between generic maps and the typed request and response
model of an Elasticsearch node.
"""

from esbridge.native import (
    EMPTY_SETTINGS,
    ContentType,
    Executor,
    OperationConverter,
    ResultConverter,
    Settings,
    ValueConverter,
    VersionType,
    to_settings,
)

__all__ = [
    "EMPTY_SETTINGS",
    "ContentType",
    "Executor",
    "OperationConverter",
    "ResultConverter",
    "Settings",
    "ValueConverter",
    "VersionType",
    "to_settings",
]
