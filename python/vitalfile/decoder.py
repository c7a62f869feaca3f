"""Stateful stream decoder for VITAL packets."""

from __future__ import annotations

import logging
import struct
from enum import IntEnum
from typing import Iterable

from .errors import InvalidFormatError, TruncatedStreamError
from .model import DeviceRecord, Document, Sample, Track
from .reader import ByteReader

logger = logging.getLogger(__name__)

# Wire format constants
MAGIC = b"VITA"
HEADER_FMT = "<4sIHhI4B"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 20

PACKET_PREFIX_FMT = "<BI"
PACKET_PREFIX_SIZE = struct.calcsize(PACKET_PREFIX_FMT)  # 5

# Offsets inside a data record body (packet offsets 7, 15 and 17)
REC_TIMESTAMP_OFFSET = 2
REC_TRACK_ID_OFFSET = 10
REC_VALUE_OFFSET = 12
REC_MIN_SIZE = REC_VALUE_OFFSET + 4  # 16

DEFAULT_MAX_PACKET_SIZE = 64 * 1024 * 1024


class PacketType(IntEnum):
    TRACK_INFO = 0
    RECORD = 1
    DEVICE_INFO = 9


def parse_header(data: bytes | bytearray, doc: Document) -> None:
    """Check the signature and fill the document-level header fields."""
    if bytes(data[:4]) != MAGIC:
        raise InvalidFormatError(f"Bad magic: {bytes(data[:4])!r}")
    r = ByteReader(data, "header")
    r.skip(4)   # signature
    r.skip(4)   # format version
    r.skip(2)   # header length
    doc.tz_offset = r.i16()
    r.skip(4)   # instance id
    doc.format_version = ".".join(str(r.u8()) for _ in range(4))


def decode_device(body: bytes, doc: Document) -> None:
    r = ByteReader(body, "device info")
    did = r.u32()
    doc.devices[did] = DeviceRecord(did, r.rest_utf8())


def decode_track(body: bytes, doc: Document,
                 allowed: frozenset[str] | None = None,
                 excluded: frozenset[str] = frozenset()) -> None:
    """Declare or rename a track.

    A declaration filtered out by *allowed* / *excluded* also forgets any
    earlier track with the same id.
    """
    r = ByteReader(body, "track info")
    tid = r.u16()
    name = r.rest_utf8()

    if (allowed is not None and name not in allowed) or name in excluded:
        if doc.tracks.pop(tid, None) is not None:
            logger.debug("track %d renamed to filtered name %r, dropped",
                         tid, name)
        else:
            logger.debug("track %d (%r) filtered out", tid, name)
        return

    track = doc.tracks.get(tid)
    if track is None:
        doc.tracks[tid] = Track(tid, name)
    else:
        track.name = name


def decode_record(body: bytes, doc: Document) -> bool:
    """Append one sample to its track.  Returns False if it was dropped."""
    r = ByteReader(body, "data record")
    if len(r) < REC_MIN_SIZE:
        raise InvalidFormatError(
            f"data record: body is {len(r)} bytes, need {REC_MIN_SIZE}")
    r.seek(REC_TIMESTAMP_OFFSET)
    timestamp = r.f64()
    r.seek(REC_TRACK_ID_OFFSET)
    tid = r.u16()
    r.seek(REC_VALUE_OFFSET)
    value = r.f32()

    track = doc.tracks.get(tid)
    if track is None:
        return False
    track.samples.append(Sample(timestamp, value))
    return True


class StreamDecoder:
    """Stateful stream decoder that reassembles packets from a byte stream.

    Expects the decompressed VITAL stream:
      [header(20)][type(u8) length(u32) body] ...

    Bytes may be fed in chunks of any size; an incomplete trailing
    header or packet is kept until the next feed().
    """

    def __init__(self, track_names: Iterable[str] | None = None,
                 exclude: Iterable[str] | None = None,
                 names_only: bool = False, strict: bool = False,
                 max_packet_size: int = DEFAULT_MAX_PACKET_SIZE):
        names = frozenset(track_names or ())
        self.allowed = names or None
        self.excluded = frozenset(exclude or ())
        self.names_only = names_only
        self.strict = strict
        self.max_packet_size = max_packet_size
        self.reset()

    def reset(self) -> None:
        """Discard buffered bytes and start a new document."""
        self.document = Document()
        self.packets: int = 0
        self.skipped_packets: int = 0
        self.dropped_samples: int = 0
        self.truncated_bytes: int = 0
        self._header_done = False
        self._buf = bytearray()

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet decoded."""
        return len(self._buf)

    def feed(self, data: bytes) -> None:
        """Feed raw decompressed bytes and decode every complete packet."""
        if self.document.finalized:
            raise RuntimeError("decoder already finished; call reset()")
        self._buf.extend(data)

        pos = 0
        if not self._header_done:
            if len(self._buf) >= 4 and bytes(self._buf[:4]) != MAGIC:
                raise InvalidFormatError(f"Bad magic: {bytes(self._buf[:4])!r}")
            if len(self._buf) < HEADER_SIZE:
                return
            parse_header(self._buf[:HEADER_SIZE], self.document)
            self._header_done = True
            pos = HEADER_SIZE
            logger.debug("header: version %s, dgmt %d min",
                         self.document.format_version, self.document.tz_offset)

        buf = self._buf
        end = len(buf)
        while end - pos >= PACKET_PREFIX_SIZE:
            ptype, plen = struct.unpack_from(PACKET_PREFIX_FMT, buf, pos)
            if plen > self.max_packet_size:
                raise InvalidFormatError(
                    f"packet length {plen} exceeds max_packet_size "
                    f"{self.max_packet_size}")
            start = pos + PACKET_PREFIX_SIZE
            if end - start < plen:
                break
            self._dispatch(ptype, bytes(buf[start:start + plen]))
            pos = start + plen

        del buf[:pos]

    def _dispatch(self, ptype: int, body: bytes) -> None:
        self.packets += 1
        if ptype == PacketType.DEVICE_INFO:
            decode_device(body, self.document)
        elif ptype == PacketType.TRACK_INFO:
            decode_track(body, self.document, self.allowed, self.excluded)
        elif ptype == PacketType.RECORD:
            if self.names_only:
                return
            if not decode_record(body, self.document):
                self.dropped_samples += 1
        else:
            self.skipped_packets += 1

    def finish(self) -> Document:
        """Signal end of stream and return the finalized document."""
        if not self._header_done:
            raise TruncatedStreamError(
                f"stream ended after {len(self._buf)} bytes, "
                f"header needs {HEADER_SIZE}", pending=len(self._buf))

        if self._buf:
            self.truncated_bytes = len(self._buf)
            if self.strict:
                raise TruncatedStreamError(
                    f"stream ended inside a packet "
                    f"({self.truncated_bytes} bytes pending)",
                    pending=self.truncated_bytes)
            logger.warning("discarding %d bytes of truncated trailing packet",
                           self.truncated_bytes)
            self._buf.clear()

        logger.debug("decoded %d packets (%d skipped), %d samples dropped",
                     self.packets, self.skipped_packets, self.dropped_samples)
        self.document.finalize()
        return self.document
