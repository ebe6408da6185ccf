from . import validation
from . import errors
from . import message_service
from . import query_service
from . import tx_service

__all__ = [
    "validation",
    "errors",
    "message_service",
    "query_service",
    "tx_service",
]
