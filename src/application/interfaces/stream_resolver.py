"""ストリーミングURL解決インターフェース"""

from typing import Protocol

from src.domain.entities import FormatStream, StreamPair, StreamRequest


class StreamResolver(Protocol):
    """yt-dlp -g 相当のURL解決"""

    async def resolve(self, request: StreamRequest) -> StreamPair:
        """
        ストリーミングURL取得（ダウンロードしない）

        Args:
            request: 動画URLとフォーマット指定

        Returns:
            映像・音声URLのペア（片方は空文字の場合あり）
        """
        ...


class FormatTableResolver(Protocol):
    """フォーマット一覧からIDで選択するURL解決"""

    async def resolve_format(self, request: StreamRequest) -> FormatStream:
        """
        フォーマットIDでストリームを取得

        Args:
            request: 動画URLとフォーマットID

        Returns:
            URL・フォーマットID・拡張子
        """
        ...
