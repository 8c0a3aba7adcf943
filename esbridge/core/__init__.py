from ._log_helper import debug, logger, warn
from .data_model import DataModel, DataModelField, Empty

__all__ = [
    "DataModel",
    "DataModelField",
    "Empty",
    "debug",
    "logger",
    "warn",
]
