"""yt-dlp のフォーマット一覧からIDで選択するクライアント"""

import asyncio
from typing import Any

import yt_dlp

from src.domain.entities import FormatStream, StreamRequest
from src.domain.exceptions import StreamExtractionError
from src.domain.stream_format import select_format
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


class YtdlpFormatTableResolver:
    """
    yt-dlp の Python API でフォーマット一覧を取得し、IDで選択する

    -g の出力ではなく、メタデータ（formats）から URL / format_id / ext を返す
    """

    def __init__(self, timeout_sec: float = 60) -> None:
        self.timeout_sec = timeout_sec
        self.ydl_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "noplaylist": True,
            # 通信停止時にワーカースレッド自体が終了するように
            "socket_timeout": timeout_sec,
        }

    async def resolve_format(self, request: StreamRequest) -> FormatStream:
        """
        フォーマットIDでストリームを取得

        Raises:
            StreamExtractionError: メタデータ取得失敗・タイムアウト
            FormatNotFoundError: 該当フォーマットなし
        """
        try:
            info = await asyncio.wait_for(
                asyncio.to_thread(self._extract_info, request.video_url),
                timeout=self.timeout_sec,
            )
        except asyncio.TimeoutError as e:
            raise StreamExtractionError(
                f"yt-dlp timed out after {self.timeout_sec}s"
            ) from e

        formats = info.get("formats") or []
        logger.debug(f"[Format] 利用可能なフォーマット: {len(formats)}件")

        return select_format(formats, request.format)

    def _extract_info(self, video_url: str) -> dict[str, Any]:
        try:
            with yt_dlp.YoutubeDL(self.ydl_opts) as ydl:
                info = ydl.extract_info(video_url, download=False)
        except yt_dlp.utils.DownloadError as e:
            raise StreamExtractionError(f"yt-dlp error: {e}") from e

        if not info:
            raise StreamExtractionError(f"yt-dlp returned no metadata: {video_url}")
        return info
