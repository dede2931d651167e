"""HTTP API のテスト"""

import asyncio
import logging

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config.settings import Settings
from src.application.usecases.resolve_stream import ResolveStreamUseCase
from src.domain.entities import FormatStream, StreamPair, StreamRequest
from src.domain.exceptions import FormatNotFoundError, StreamExtractionError
from src.infrastructure.ytdlp_resolver import YtdlpStreamResolver

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class FakeStreamResolver:
    """呼び出しを記録するリゾルバ"""

    def __init__(self, result: StreamPair | Exception) -> None:
        self.result = result
        self.requests: list[StreamRequest] = []

    async def resolve(self, request: StreamRequest) -> StreamPair:
        self.requests.append(request)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeFormatTableResolver:
    def __init__(self, result: FormatStream | Exception) -> None:
        self.result = result
        self.requests: list[StreamRequest] = []

    async def resolve_format(self, request: StreamRequest) -> FormatStream:
        self.requests.append(request)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def make_client(
    stream_resolver: FakeStreamResolver | YtdlpStreamResolver,
    format_table_resolver: FakeFormatTableResolver | None = None,
) -> TestClient:
    usecase = ResolveStreamUseCase(
        stream_resolver=stream_resolver,
        format_table_resolver=format_table_resolver
        or FakeFormatTableResolver(FormatNotFoundError("unused")),
    )
    return TestClient(create_app(settings=Settings(APP_URL=None), usecase=usecase))


def assert_json(response) -> None:
    assert response.headers["content-type"].startswith("application/json")


class TestStreamEndpoint:
    """GET /stream のテスト"""

    def test_missing_video(self) -> None:
        """video なしは 400、リゾルバは呼ばれない"""
        resolver = FakeStreamResolver(StreamPair(video="V"))
        response = make_client(resolver).get("/stream", params={"format": "mp4"})

        assert response.status_code == 400
        assert response.json() == {"status": False, "message": "Missing video URL"}
        assert_json(response)
        assert resolver.requests == []

    def test_missing_video_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """400 の場合も警告ログを出す"""
        resolver = FakeStreamResolver(StreamPair(video="V"))
        with caplog.at_level(logging.WARNING, logger="app.main"):
            make_client(resolver).get("/stream")

        assert "video" in caplog.text

    def test_blank_video(self) -> None:
        """空白のみの video も 400"""
        resolver = FakeStreamResolver(StreamPair(video="V"))
        response = make_client(resolver).get("/stream", params={"video": "   "})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing video URL"
        assert resolver.requests == []

    def test_success(self) -> None:
        """成功時は stream にペアを返す"""
        resolver = FakeStreamResolver(StreamPair(video="V", audio="A"))
        response = make_client(resolver).get(
            "/stream", params={"video": URL, "format": "mp4"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": True,
            "stream": {"video": "V", "audio": "A"},
        }
        assert_json(response)
        assert resolver.requests == [StreamRequest(video_url=URL, format="mp4")]

    def test_format_omitted(self) -> None:
        """format 省略時は空文字で渡す"""
        resolver = FakeStreamResolver(StreamPair(video="V"))
        make_client(resolver).get("/stream", params={"video": URL})

        assert resolver.requests == [StreamRequest(video_url=URL, format="")]

    def test_resolver_failure(self) -> None:
        """リゾルバ失敗時は status=false とエラーメッセージ"""
        resolver = FakeStreamResolver(StreamExtractionError("yt-dlp failed: boom"))
        response = make_client(resolver).get("/stream", params={"video": URL})

        assert response.status_code == 200
        assert response.json() == {"status": False, "message": "yt-dlp failed: boom"}
        assert_json(response)

    def test_nonzero_exit_end_to_end(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """yt-dlp の非0終了は stderr を含むメッセージになる"""

        class FailedProcess:
            returncode = None

            async def communicate(self):
                self.returncode = 1
                return b"", b"ERROR: Unsupported URL"

        async def _fake_exec(*cmd, **kwargs):
            return FailedProcess()

        monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec)

        response = make_client(YtdlpStreamResolver()).get(
            "/stream", params={"video": URL}
        )

        body = response.json()
        assert body["status"] is False
        assert "Unsupported URL" in body["message"]
        assert_json(response)


class TestStreamFormatEndpoint:
    """GET /stream/format のテスト"""

    def test_success(self) -> None:
        """url / format_id / ext を返す"""
        table = FakeFormatTableResolver(
            FormatStream(url="https://a/18", format_id="18", ext="mp4")
        )
        response = make_client(FakeStreamResolver(StreamPair()), table).get(
            "/stream/format", params={"video": URL, "format": "18"}
        )

        assert response.json() == {
            "status": True,
            "stream": {"url": "https://a/18", "format_id": "18", "ext": "mp4"},
        }
        assert_json(response)

    def test_not_found(self) -> None:
        """該当フォーマットなしは status=false"""
        table = FakeFormatTableResolver(FormatNotFoundError("Format not found: 22"))
        response = make_client(FakeStreamResolver(StreamPair()), table).get(
            "/stream/format", params={"video": URL, "format": "22"}
        )

        assert response.json() == {
            "status": False,
            "message": "Format not found: 22",
        }

    def test_missing_video(self) -> None:
        """video なしは 400"""
        table = FakeFormatTableResolver(FormatStream("u", "18", "mp4"))
        response = make_client(FakeStreamResolver(StreamPair()), table).get(
            "/stream/format"
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing video URL"
        assert table.requests == []


def test_health() -> None:
    """ヘルスチェック"""
    response = make_client(FakeStreamResolver(StreamPair())).get("/health")
    assert response.json() == {"status": True}
