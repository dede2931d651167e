"""yt-dlp -g によるストリーミングURL解決"""

import asyncio
import sys

from src.domain.entities import StreamPair, StreamRequest
from src.domain.exceptions import StreamExtractionError
from src.domain.stream_format import build_ytdlp_args, parse_stream_output
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


class YtdlpStreamResolver:
    """yt-dlp サブプロセスによる実装"""

    def __init__(
        self,
        ytdlp_path: str = "yt-dlp",
        timeout_sec: float = 60,
    ):
        """
        Args:
            ytdlp_path: yt-dlpの実行パス
            timeout_sec: yt-dlp 実行のタイムアウト（秒）
        """
        self.ytdlp_path = ytdlp_path
        self.timeout_sec = timeout_sec

    async def resolve(self, request: StreamRequest) -> StreamPair:
        """
        yt-dlp -g でストリーミングURLを取得
        動画全体をダウンロードせず、URLだけ取得

        Args:
            request: 動画URLとフォーマット指定

        Returns:
            StreamPair(video, audio)

        Raises:
            StreamExtractionError: yt-dlp 実行失敗・タイムアウト・出力なし
        """
        cmd = [self.ytdlp_path, *build_ytdlp_args(request)]
        logger.debug(f"[yt-dlp] コマンド: {' '.join(cmd)}")

        stdout = await self._run(cmd)
        return parse_stream_output(stdout, request)

    async def _run(self, cmd: list[str]) -> str:
        """コマンドを1回実行し、標準出力をテキストで返す"""
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise StreamExtractionError(f"yt-dlp failed: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.timeout_sec
            )
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            raise StreamExtractionError(
                f"yt-dlp timed out after {self.timeout_sec}s"
            ) from e
        except asyncio.CancelledError:
            # リクエストが中断された場合は子プロセスも止める
            await self._kill(proc)
            raise

        error_text = stderr.decode(errors="replace")
        if error_text:
            sys.stderr.write(error_text)

        if proc.returncode != 0:
            raise StreamExtractionError(
                f"yt-dlp failed: exit status {proc.returncode}: {error_text.strip()}"
            )

        return stdout.decode(errors="replace")

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is not None:
            return
        try:
            proc.kill()
        except ProcessLookupError:
            return
        await proc.wait()
