"""Test loading gzip-compressed VITAL files and the document views.

Run from the repo root:
    python3 tests/test_storage.py
"""

import sys
import os
import gzip
import io
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "python"))

import numpy as np
import pytest

from vitalfile import load, VitalReader, InvalidFormatError
from vitalfile.errors import TruncatedStreamError

from vital_builders import (
    make_header, track_packet, record_packet, sample_stream, gzip_bytes,
)


def _write_tmp(data, suffix=".vital"):
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
        f.write(data)
        return f.name


def test_load_path():
    """Load a .vital file from disk with a tiny chunk size."""
    print("test_load_path...", end="")

    tmppath = _write_tmp(gzip_bytes(sample_stream()))
    try:
        doc = load(tmppath, chunk_size=3)
        assert doc.format_version == "1.11.2.0"
        assert doc.tz_offset == 540
        assert doc.devices[1].name == "Intellivue"
        assert [s.value for s in doc.tracks[5].samples] == [72.0, 73.0, 74.5]

        from pathlib import Path
        doc2 = load(Path(tmppath))
        assert doc2.sample_count == doc.sample_count == 5
    finally:
        os.unlink(tmppath)

    print(" OK")


def test_load_stream():
    print("test_load_stream...", end="")

    buf = io.BytesIO(gzip_bytes(sample_stream()))
    doc = load(buf, track_names=["HR"])
    assert [t.name for t in doc.tracks.values()] == ["HR"]
    # The caller's stream is left open
    assert not buf.closed

    print(" OK")


def test_reader_context_manager():
    print("test_reader_context_manager...", end="")

    tmppath = _write_tmp(gzip_bytes(sample_stream()))
    try:
        with VitalReader(tmppath, chunk_size=16) as reader:
            chunks = list(reader.chunks())
            assert all(len(c) <= 16 for c in chunks)
            assert b"".join(chunks) == sample_stream()
        assert reader._gz is None

        with VitalReader(tmppath, exclude=["HR"]) as reader:
            doc = reader.read()
        assert 5 not in doc.tracks
        assert reader.name == tmppath
    finally:
        os.unlink(tmppath)

    with pytest.raises(ValueError):
        VitalReader("x.vital", chunk_size=0)

    print(" OK")


def test_multi_member_gzip():
    """Concatenated gzip members form one stream."""
    print("test_multi_member_gzip...", end="")

    data = sample_stream()
    blob = gzip_bytes(data[:50]) + gzip_bytes(data[50:])
    doc = load(io.BytesIO(blob), chunk_size=7)
    assert len(doc.tracks[5]) == 3

    print(" OK")


def test_load_errors():
    print("test_load_errors...", end="")

    with pytest.raises(FileNotFoundError):
        load(os.path.join(tempfile.gettempdir(), "does-not-exist.vital"))

    # Plain bytes, not gzip
    tmppath = _write_tmp(sample_stream())
    try:
        with pytest.raises(OSError):
            load(tmppath)
    finally:
        os.unlink(tmppath)

    # gzip stream cut short
    blob = gzip_bytes(sample_stream())
    with pytest.raises(EOFError):
        load(io.BytesIO(blob[:len(blob) // 2]))

    # Valid gzip, wrong signature
    with pytest.raises(InvalidFormatError):
        load(io.BytesIO(gzip_bytes(b"NOPE" + make_header()[4:])))

    # Valid gzip, truncated trailing packet
    data = make_header() + track_packet(1, "HR") + record_packet(1, 1.0, 1.0)[:-2]
    doc = load(io.BytesIO(gzip_bytes(data)))
    assert len(doc.tracks[1]) == 0
    with pytest.raises(TruncatedStreamError):
        load(io.BytesIO(gzip_bytes(data)), strict=True)

    print(" OK")


def test_track_series():
    """Track.series() returns numpy arrays in arrival order."""
    print("test_track_series...", end="")

    doc = load(io.BytesIO(gzip_bytes(sample_stream())))
    ts, vals = doc.tracks[5].series()
    assert isinstance(ts, np.ndarray)
    assert ts.dtype == np.float64
    assert vals.dtype == np.float32
    np.testing.assert_array_equal(ts, [1000.0, 1001.0, 1002.0])
    np.testing.assert_allclose(vals, [72.0, 73.0, 74.5], rtol=1e-6)

    # Values are float32 on the wire
    data = make_header() + track_packet(1, "T") + record_packet(1, 0.1, 0.1)
    doc = load(io.BytesIO(gzip_bytes(data)))
    ts, vals = doc.tracks[1].series()
    assert ts[0] == 0.1
    assert vals[0] == np.float32(0.1)
    assert doc.tracks[1].samples[0].value != 0.1

    ts, vals = load(io.BytesIO(gzip_bytes(make_header() + track_packet(2, "E")))
                    ).tracks[2].series()
    assert len(ts) == 0 and len(vals) == 0

    print(" OK")


def test_document_time_range():
    print("test_document_time_range...", end="")

    doc = load(io.BytesIO(gzip_bytes(sample_stream())))
    assert doc.dtstart == 1000.0
    assert doc.dtend == 1002.0
    assert doc.tracks[5].dtstart == 1000.0
    assert doc.tracks[5].dtend == 1002.0
    assert doc.find_track("SPO2").id == 6
    assert doc.find_track("NOPE") is None

    empty = load(io.BytesIO(gzip_bytes(make_header() + track_packet(1, "HR"))))
    assert empty.dtstart is None
    assert empty.dtend is None
    assert empty.tracks[1].dtstart is None
    assert empty.sample_count == 0

    print(" OK")


if __name__ == "__main__":
    print("vitalfile storage tests")
    print("=======================\n")

    test_load_path()
    test_load_stream()
    test_reader_context_manager()
    test_multi_member_gzip()
    test_load_errors()
    test_track_series()
    test_document_time_range()

    print("\nAll tests passed.")
