"""
Conversion des descripteurs ffprobe en StreamEncodingRecord.
"""

from typing import Any, Optional

from mediaingest.core.entities.stream import StreamEncodingRecord, StreamType

_CODEC_TYPES = {
    "video": StreamType.VIDEO,
    "audio": StreamType.AUDIO,
    "subtitle": StreamType.SUBTITLE,
}


def parse_stream(
    stream: dict[str, Any], media_link_id: Optional[str] = None
) -> Optional[StreamEncodingRecord]:
    """
    Normalise un flux ffprobe.

    Les flux de donnees et pieces jointes (polices) sont ignores.

    Args:
        stream: Element de la liste "streams" de ffprobe
        media_link_id: Lien media proprietaire

    Returns:
        Le StreamEncodingRecord, ou None si le type est ignore
    """
    stream_type = _CODEC_TYPES.get(stream.get("codec_type", ""))
    if stream_type is None:
        return None

    tags = stream.get("tags") or {}
    disposition = stream.get("disposition") or {}

    return StreamEncodingRecord(
        media_link_id=media_link_id,
        stream_type=stream_type,
        index=int(stream.get("index", 0)),
        codec_name=stream.get("codec_name"),
        codec_long_name=stream.get("codec_long_name"),
        profile=stream.get("profile"),
        bit_rate=_parse_int(stream.get("bit_rate")),
        level=_parse_int(stream.get("level")),
        width=_parse_int(stream.get("width")),
        height=_parse_int(stream.get("height")),
        pix_fmt=stream.get("pix_fmt"),
        channels=_parse_int(stream.get("channels")),
        channel_layout=stream.get("channel_layout"),
        sample_rate=_parse_int(stream.get("sample_rate")),
        language=tags.get("language") or tags.get("LANGUAGE"),
        title=tags.get("title") or tags.get("TITLE"),
        default=disposition.get("default") == 1,
        duration_seconds=_parse_float(stream.get("duration")),
    )


def _parse_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
