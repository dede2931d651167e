"""設定管理"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # yt-dlp
    YTDLP_PATH: str = "yt-dlp"
    # yt-dlp 1回の実行のタイムアウト（秒）
    YTDLP_TIMEOUT: int = 60

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Keep-alive (ホスティング側のアイドル停止対策)
    # 未設定または http(s):// 以外ならループは起動しない
    APP_URL: str | None = None
    KEEP_ALIVE_INTERVAL_SEC: int = 300  # 5分
    KEEP_ALIVE_TIMEOUT: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
