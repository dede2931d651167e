# Application Interfaces (Protocols)
from src.application.interfaces.stream_resolver import (
    FormatTableResolver,
    StreamResolver,
)

__all__ = [
    "StreamResolver",
    "FormatTableResolver",
]
