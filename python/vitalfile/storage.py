"""Reading VITAL files from disk or from file objects.

A VITAL file is a gzip stream wrapping:
  [signature: "VITA" 4 bytes]
  [format version: uint32 LE]
  [header length: uint16 LE]
  [dgmt: int16 LE, minutes]
  [instance id: uint32 LE]
  [program version: 4 x uint8]
  [packet 0]
  ...
  [packet N]

Each packet is [type: uint8][length: uint32 LE][body: length bytes].

The gzip stream is decompressed incrementally and each chunk is fully
decoded before the next one is read, so memory use is bounded by the
decoded document plus one chunk and the largest partial packet.
"""

from __future__ import annotations

import gzip
import logging
import os
from pathlib import Path
from typing import IO, Any, Iterable, Iterator

from .decoder import StreamDecoder
from .model import Document

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


def parse_chunks(chunks: Iterable[bytes], **options: Any) -> Document:
    """Decode an iterable of decompressed byte chunks into a Document.

    Keyword options are passed to StreamDecoder (track_names, exclude,
    names_only, strict, max_packet_size).
    """
    decoder = StreamDecoder(**options)
    for chunk in chunks:
        decoder.feed(chunk)
    return decoder.finish()


class VitalReader:
    """Reads a gzip-compressed VITAL file or stream.

    Accepts a filesystem path or an open binary file object holding gzip
    data.  A file object passed in is not closed by the reader; the gzip
    wrapper around it is.
    """

    def __init__(self, source: str | os.PathLike | IO[bytes],
                 chunk_size: int = DEFAULT_CHUNK_SIZE, **options: Any):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._source = source
        self._chunk_size = chunk_size
        self._options = options
        self._gz: gzip.GzipFile | None = None

    @property
    def name(self) -> str:
        if isinstance(self._source, (str, os.PathLike)):
            return str(Path(self._source))
        return getattr(self._source, "name", "<stream>")

    def open(self) -> None:
        if self._gz is not None:
            return
        if isinstance(self._source, (str, os.PathLike)):
            self._gz = gzip.open(self._source, "rb")
        else:
            self._gz = gzip.GzipFile(fileobj=self._source, mode="rb")

    def chunks(self) -> Iterator[bytes]:
        """Yield decompressed chunks until the gzip stream ends."""
        if self._gz is None:
            self.open()
        assert self._gz is not None

        while True:
            chunk = self._gz.read(self._chunk_size)
            if not chunk:
                break
            yield chunk

    def read(self) -> Document:
        """Decode the whole stream and return the finalized Document."""
        doc = parse_chunks(self.chunks(), **self._options)
        logger.debug("%s: %d devices, %d tracks, %d samples", self.name,
                     len(doc.devices), len(doc.tracks), doc.sample_count)
        return doc

    def close(self) -> None:
        if self._gz:
            self._gz.close()
            self._gz = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc):
        self.close()


def load(source: str | os.PathLike | IO[bytes], **options: Any) -> Document:
    """Load a VITAL file from a path or a gzip binary stream.

    Raises InvalidFormatError for a bad signature or malformed packet,
    TruncatedStreamError for a cut-off header (or trailing packet in
    strict mode), and OSError / EOFError for I/O and gzip failures.
    """
    with VitalReader(source, **options) as reader:
        return reader.read()
