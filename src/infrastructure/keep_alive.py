"""ホスティング環境のアイドル停止を防ぐ定期セルフping"""

import asyncio

import httpx

from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


def is_valid_url(url: str | None) -> bool:
    """http:// または https:// で始まり、URLとして解釈できるか"""
    if not url or not url.startswith(("http://", "https://")):
        return False
    try:
        httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return True


async def keep_alive_loop(
    url: str,
    interval_sec: float,
    client: httpx.AsyncClient,
) -> None:
    """
    interval_sec ごとに url へ GET を送る

    通信エラーはログ出力のみで継続する。タスクのキャンセルで終了。
    """
    while True:
        await asyncio.sleep(interval_sec)
        try:
            response = await client.get(url)
            await response.aclose()
            logger.debug(f"[KeepAlive] ping: {url} -> {response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"[KeepAlive] エラー: {e}")


def start_keep_alive(
    url: str | None,
    interval_sec: float,
    timeout_sec: float = 10,
) -> asyncio.Task | None:
    """
    キープアライブタスクを起動

    Returns:
        起動したタスク。URLが未設定・不正なら None
    """
    if not is_valid_url(url):
        logger.info("[KeepAlive] APP_URL が未設定または不正のためスキップ")
        return None

    async def _run() -> None:
        async with httpx.AsyncClient(timeout=timeout_sec) as client:
            await keep_alive_loop(url, interval_sec, client)

    logger.info(f"[KeepAlive] 開始: {url} ({interval_sec}秒間隔)")
    return asyncio.create_task(_run(), name="keep-alive")


async def stop_keep_alive(task: asyncio.Task | None) -> None:
    """キープアライブタスクを停止"""
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        # キャンセル前にタスクが異常終了していた場合
        logger.error(f"[KeepAlive] 異常終了: {e}")
    logger.info("[KeepAlive] 停止")
