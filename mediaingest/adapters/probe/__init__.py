"""Sonde ffprobe et normalisation des flux."""

from mediaingest.adapters.probe.ffprobe import FFprobeStreamProbe
from mediaingest.adapters.probe.parsers import parse_stream

__all__ = ["FFprobeStreamProbe", "parse_stream"]
