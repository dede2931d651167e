"""ユースケース: 動画URLから直接再生可能なストリーミングURLを取得"""

from src.application.interfaces.stream_resolver import (
    FormatTableResolver,
    StreamResolver,
)
from src.domain.entities import FormatStream, StreamPair, StreamRequest
from src.domain.exceptions import InvalidStreamRequestError
from src.infrastructure.logging_config import LogContext, get_logger

logger = get_logger(__name__)


class ResolveStreamUseCase:
    """
    ストリーミングURL取得ユースケース

    リクエストの検証を行い、yt-dlp ベースのリゾルバに委譲する
    """

    def __init__(
        self,
        stream_resolver: StreamResolver,
        format_table_resolver: FormatTableResolver,
    ):
        self.stream_resolver = stream_resolver
        self.format_table_resolver = format_table_resolver

    async def execute(self, request: StreamRequest) -> StreamPair:
        """
        映像・音声URLのペアを取得

        Raises:
            InvalidStreamRequestError: 動画URLが空
            StreamExtractionError: yt-dlp 実行失敗
        """
        self._validate(request)
        ctx = LogContext(video=request.video_url, format=request.format)
        logger.info(f"[Stream] 解決開始: {ctx}")

        pair = await self.stream_resolver.resolve(request)

        logger.info(
            f"[Stream] 解決完了: {ctx.update(has_video=bool(pair.video), has_audio=bool(pair.audio))}"
        )
        return pair

    async def execute_by_format_id(self, request: StreamRequest) -> FormatStream:
        """
        フォーマットIDを指定してストリームを取得

        Raises:
            InvalidStreamRequestError: 動画URLが空
            StreamExtractionError: メタデータ取得失敗
            FormatNotFoundError: 該当フォーマットなし
        """
        self._validate(request)
        ctx = LogContext(video=request.video_url, format_id=request.format)
        logger.info(f"[Format] 解決開始: {ctx}")

        stream = await self.format_table_resolver.resolve_format(request)

        logger.info(f"[Format] 解決完了: {ctx.update(selected=stream.format_id)}")
        return stream

    @staticmethod
    def _validate(request: StreamRequest) -> None:
        if not request.video_url.strip():
            raise InvalidStreamRequestError("Missing video URL")
