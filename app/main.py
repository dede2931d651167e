"""FastAPI アプリケーションエントリーポイント"""

from contextlib import asynccontextmanager
from pathlib import Path

# .envファイルを最初に読み込む
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from src.application.usecases.resolve_stream import ResolveStreamUseCase
from src.domain.entities import StreamRequest, StreamResponse
from src.domain.exceptions import InvalidStreamRequestError, StreamApiError
from src.infrastructure.keep_alive import start_keep_alive, stop_keep_alive
from src.infrastructure.logging_config import get_logger, parse_log_level, setup_logging
from src.infrastructure.ytdlp_format_table import YtdlpFormatTableResolver
from src.infrastructure.ytdlp_resolver import YtdlpStreamResolver

logger = get_logger(__name__)

MISSING_VIDEO_MESSAGE = "Missing video URL"


def init_usecase(settings: Settings) -> ResolveStreamUseCase:
    """DIでユースケースを組み立て"""
    return ResolveStreamUseCase(
        stream_resolver=YtdlpStreamResolver(
            ytdlp_path=settings.YTDLP_PATH,
            timeout_sec=settings.YTDLP_TIMEOUT,
        ),
        format_table_resolver=YtdlpFormatTableResolver(
            timeout_sec=settings.YTDLP_TIMEOUT,
        ),
    )


def json_response(body: StreamResponse, status_code: int = 200) -> JSONResponse:
    """全レスポンスで Content-Type: application/json を返す"""
    return JSONResponse(content=body.to_dict(), status_code=status_code)


def create_app(
    settings: Settings | None = None,
    usecase: ResolveStreamUseCase | None = None,
) -> FastAPI:
    """
    アプリケーションを生成

    Args:
        settings: 設定（省略時は環境変数 / .env から取得）
        usecase: ユースケース（テスト時の差し替え用）
    """
    settings = settings or get_settings()
    usecase = usecase or init_usecase(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = start_keep_alive(
            settings.APP_URL,
            interval_sec=settings.KEEP_ALIVE_INTERVAL_SEC,
            timeout_sec=settings.KEEP_ALIVE_TIMEOUT,
        )
        yield
        await stop_keep_alive(task)

    app = FastAPI(title="yt-dlp Stream URL API", lifespan=lifespan)

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse(content={"status": True})

    @app.get("/stream")
    async def stream(video: str = "", format: str = "") -> JSONResponse:
        """映像・音声のストリーミングURLを返す"""
        if not video:
            logger.warning("[Stream] video パラメータなし")
            return json_response(StreamResponse.failure(MISSING_VIDEO_MESSAGE), 400)

        try:
            pair = await usecase.execute(StreamRequest(video_url=video, format=format))
        except InvalidStreamRequestError as e:
            logger.warning(f"[Stream] 不正なリクエスト: {e}")
            return json_response(StreamResponse.failure(str(e)), 400)
        except StreamApiError as e:
            logger.error(f"[Stream] 失敗: {video} - {e}")
            return json_response(StreamResponse.failure(str(e)))

        return json_response(StreamResponse.success(pair))

    @app.get("/stream/format")
    async def stream_format(video: str = "", format: str = "") -> JSONResponse:
        """フォーマットIDで選択したストリームを返す"""
        if not video:
            logger.warning("[Format] video パラメータなし")
            return json_response(StreamResponse.failure(MISSING_VIDEO_MESSAGE), 400)

        try:
            selected = await usecase.execute_by_format_id(
                StreamRequest(video_url=video, format=format)
            )
        except InvalidStreamRequestError as e:
            logger.warning(f"[Format] 不正なリクエスト: {e}")
            return json_response(StreamResponse.failure(str(e)), 400)
        except StreamApiError as e:
            logger.error(f"[Format] 失敗: {video} - {e}")
            return json_response(StreamResponse.failure(str(e)))

        return json_response(StreamResponse.success(selected))

    return app


def run() -> None:
    """uvicorn でサーバーを起動（ポートのバインド失敗時はプロセス終了）"""
    settings = get_settings()
    setup_logging(level=parse_log_level(settings.LOG_LEVEL))

    logger.info(f"🚀 Server running on {settings.HOST}:{settings.PORT}")
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
