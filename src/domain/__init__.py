# Domain Layer
from src.domain.entities import (
    FormatStream,
    StreamPair,
    StreamRequest,
    StreamResponse,
)
from src.domain.exceptions import (
    FormatNotFoundError,
    InvalidStreamRequestError,
    StreamApiError,
    StreamExtractionError,
)

__all__ = [
    "StreamRequest",
    "StreamPair",
    "FormatStream",
    "StreamResponse",
    "StreamApiError",
    "InvalidStreamRequestError",
    "StreamExtractionError",
    "FormatNotFoundError",
]
