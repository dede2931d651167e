"""ドメインエンティティ定義"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StreamRequest:
    """ストリーミングURL取得リクエスト"""

    video_url: str
    format: str = ""

    @property
    def is_audio(self) -> bool:
        """音声のみを要求しているか（"audio" / "mp3" を含む）"""
        return "audio" in self.format or "mp3" in self.format


@dataclass(frozen=True)
class StreamPair:
    """映像・音声のストリーミングURLペア"""

    video: str = ""
    audio: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"video": self.video, "audio": self.audio}


@dataclass(frozen=True)
class FormatStream:
    """フォーマットID指定で取得したストリーム"""

    url: str
    format_id: str
    ext: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "format_id": self.format_id, "ext": self.ext}


@dataclass(frozen=True)
class StreamResponse:
    """
    APIレスポンスのエンベロープ

    status が True なら stream、False なら message のみを持つ
    """

    status: bool
    message: str | None = None
    stream: StreamPair | FormatStream | None = None

    @classmethod
    def success(cls, stream: StreamPair | FormatStream) -> "StreamResponse":
        return cls(status=True, stream=stream)

    @classmethod
    def failure(cls, message: str) -> "StreamResponse":
        return cls(status=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        """JSON用の辞書（未設定のフィールドは含めない）"""
        body: dict[str, Any] = {"status": self.status}
        if self.status and self.stream is not None:
            body["stream"] = self.stream.to_dict()
        else:
            body["message"] = self.message or ""
        return body
