"""
Stream encoding entities.

One StreamEncodingRecord describes one physical stream of a media file,
as reported by the probe.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StreamType(Enum):
    """Category of a physical stream, in the order results are flattened."""

    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"


@dataclass(frozen=True)
class StreamEncodingRecord:
    """
    One video, audio or subtitle stream of a media file.

    Owned by the media link it describes and replaced wholesale
    when the file is analyzed again.

    Attributes:
        media_link_id: Owning media link
        stream_type: VIDEO, AUDIO or SUBTITLE
        index: Stream index inside the container
        codec_name: Short codec name (h264, aac, subrip...)
        codec_long_name: Descriptive codec name
        profile: Codec profile (Main 10, LC...)
        bit_rate: Bit rate in bits/s
        level: Codec level (video)
        width: Frame width in pixels (video)
        height: Frame height in pixels (video)
        pix_fmt: Pixel format (video)
        channels: Channel count (audio)
        channel_layout: Channel layout (audio)
        sample_rate: Sample rate in Hz (audio)
        language: Language tag
        title: Stream title tag
        default: Default disposition flag
        duration_seconds: Stream duration
    """

    media_link_id: Optional[str]
    stream_type: StreamType
    index: int
    codec_name: Optional[str] = None
    codec_long_name: Optional[str] = None
    profile: Optional[str] = None
    bit_rate: Optional[int] = None
    level: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    pix_fmt: Optional[str] = None
    channels: Optional[int] = None
    channel_layout: Optional[str] = None
    sample_rate: Optional[int] = None
    language: Optional[str] = None
    title: Optional[str] = None
    default: bool = False
    duration_seconds: Optional[float] = None

    @property
    def resolution(self) -> Optional[str]:
        """Resolution as "WIDTHxHEIGHT" for video streams."""
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return None
