"""vitalfile - Streaming decoder for VITAL physiological recordings."""

from .errors import VitalError, InvalidFormatError, TruncatedStreamError
from .model import Document, DeviceRecord, Track, Sample
from .montypes import MONTYPES, montype_name, montype_code
from .reader import ByteReader
from .decoder import PacketType, StreamDecoder, parse_header
from .storage import VitalReader, load, parse_chunks

__all__ = [
    "VitalError", "InvalidFormatError", "TruncatedStreamError",
    "Document", "DeviceRecord", "Track", "Sample",
    "MONTYPES", "montype_name", "montype_code",
    "ByteReader",
    "PacketType", "StreamDecoder", "parse_header",
    "VitalReader", "load", "parse_chunks",
]
