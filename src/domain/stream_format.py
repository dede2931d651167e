"""フォーマット指定と yt-dlp 出力の変換ユーティリティ"""

from typing import Any

from src.domain.entities import FormatStream, StreamPair, StreamRequest
from src.domain.exceptions import FormatNotFoundError, StreamExtractionError

# yt-dlp -f に渡すフォーマットセレクタ
MP4_SELECTOR = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/mp4"
AUDIO_SELECTOR = "bestaudio"

DEFAULT_FORMAT_ID = "best"


def build_ytdlp_args(request: StreamRequest) -> list[str]:
    """
    フォーマット指定を yt-dlp の引数リストに変換

    Args:
        request: ストリーミングURL取得リクエスト

    Returns:
        yt-dlp に渡す引数（実行パスは含まない）

    Example:
        "mp4"           → ["-f", MP4_SELECTOR, "-g", url]
        "mp3" / "audio" → ["-f", "bestaudio", "-g", url]
        それ以外        → ["-g", url]（yt-dlp のデフォルト = best）
    """
    if request.format == "mp4":
        return ["-f", MP4_SELECTOR, "-g", request.video_url]
    if request.format in ("mp3", "audio"):
        return ["-f", AUDIO_SELECTOR, "-g", request.video_url]
    return ["-g", request.video_url]


def parse_stream_output(output: str, request: StreamRequest) -> StreamPair:
    """
    yt-dlp -g の標準出力を映像・音声URLに分解

    2行なら 1行目=映像, 2行目=音声。
    1行なら音声指定（"audio" / "mp3" を含む）のとき音声、それ以外は映像として扱う。

    Raises:
        StreamExtractionError: URLが1行も得られなかった
    """
    lines = [line.strip() for line in output.rstrip().split("\n")]
    lines = [line for line in lines if line]

    if not lines:
        raise StreamExtractionError(f"yt-dlp returned no stream URLs: {output!r}")

    if len(lines) >= 2:
        return StreamPair(video=lines[0], audio=lines[1])

    if request.is_audio:
        return StreamPair(audio=lines[0])
    return StreamPair(video=lines[0])


def select_format(formats: list[dict[str, Any]], format_id: str) -> FormatStream:
    """
    フォーマット一覧から format_id 一致のものを選択

    完全一致がなければ format_id に "best" を含む最初のものにフォールバック

    Raises:
        FormatNotFoundError: 該当フォーマットなし
    """
    if not format_id:
        format_id = DEFAULT_FORMAT_ID

    selected = next(
        (f for f in formats if f.get("format_id") == format_id),
        None,
    )
    if selected is None:
        selected = next(
            (f for f in formats if DEFAULT_FORMAT_ID in (f.get("format_id") or "")),
            None,
        )

    if selected is None:
        raise FormatNotFoundError(f"Format not found: {format_id}")

    return FormatStream(
        url=selected.get("url") or "",
        format_id=selected.get("format_id") or "",
        ext=selected.get("ext") or "",
    )
