# Infrastructure Layer
from src.infrastructure.keep_alive import start_keep_alive, stop_keep_alive
from src.infrastructure.ytdlp_format_table import YtdlpFormatTableResolver
from src.infrastructure.ytdlp_resolver import YtdlpStreamResolver

__all__ = [
    "YtdlpStreamResolver",
    "YtdlpFormatTableResolver",
    "start_keep_alive",
    "stop_keep_alive",
]
