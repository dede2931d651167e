"""ドメイン固有の例外定義"""


class StreamApiError(Exception):
    """基底例外クラス"""

    pass


class InvalidStreamRequestError(StreamApiError):
    """リクエストが不正（動画URLなし等）"""

    pass


class StreamExtractionError(StreamApiError):
    """ストリーミングURL取得エラー"""

    pass


class FormatNotFoundError(StreamApiError):
    """指定フォーマットが見つからない"""

    pass
