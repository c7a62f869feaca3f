"""vitalfile command-line tool."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .errors import VitalError
from .model import Document, Track
from .montypes import montype_code
from .storage import load


def _format_time(ts: float | None) -> str:
    return "-" if ts is None else f"{ts:.3f}"


def _format_duration(s: float) -> str:
    """Format a duration in seconds as a human-readable string."""
    if s < 60:
        return f"{s:.2f}s"
    if s < 3600:
        return f"{s / 60:.1f}m"
    return f"{s / 3600:.1f}h"


def _load(args: argparse.Namespace) -> Document:
    return load(args.file, track_names=args.track, exclude=args.exclude,
                strict=args.strict)


def cmd_info(args: argparse.Namespace) -> None:
    """Print summary info about a .vital file."""
    file_size = os.path.getsize(args.file)
    doc = _load(args)

    print(f"File:       {args.file}")
    print(f"Size:       {file_size:,} bytes")
    print(f"Version:    {doc.format_version}")
    print(f"dgmt:       {doc.tz_offset} min")
    print(f"Devices:    {len(doc.devices)}")
    print(f"Tracks:     {len(doc.tracks)}")
    print(f"Samples:    {doc.sample_count:,}")

    if doc.dtstart is not None and doc.dtend is not None:
        print(f"Time range: {_format_time(doc.dtstart)}s - "
              f"{_format_time(doc.dtend)}s")
        print(f"Duration:   {_format_duration(doc.dtend - doc.dtstart)}")
    else:
        print("Time range: (empty)")


def cmd_tracks(args: argparse.Namespace) -> None:
    """List tracks with sample counts and time ranges."""
    doc = _load(args)
    print(f"{'ID':>5s}  {'Name':<24s}  {'Samples':>8s}  "
          f"{'Start':>14s}  {'End':>14s}  Montype")
    for track in doc.tracks.values():
        code = montype_code(track.name)
        label = "" if code is None else str(code)
        print(f"{track.id:5d}  {track.name:<24s}  {len(track):8,}  "
              f"{_format_time(track.dtstart):>14s}  "
              f"{_format_time(track.dtend):>14s}  {label}")


def cmd_devices(args: argparse.Namespace) -> None:
    """List devices declared in the file."""
    doc = _load(args)
    for dev in doc.devices.values():
        print(f"[{dev.id:10d}] {dev.name}")


def _format_sample(track: Track, timestamp: float, value: float) -> str:
    return f"[{timestamp:16.6f}] {track.name}: {value:g}"


def cmd_dump(args: argparse.Namespace) -> None:
    """Dump samples to stdout, track by track."""
    doc = _load(args)
    for track in doc.tracks.values():
        for i, s in enumerate(track.samples):
            if args.limit is not None and i >= args.limit:
                break
            print(_format_sample(track, s.timestamp, s.value))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="vitalfile",
                                     description="VITAL file tool")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    def add_file_parser(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", help="Path to .vital file")
        p.add_argument("--track", action="append",
                       help="Only load tracks with this name (repeatable)")
        p.add_argument("--exclude", action="append",
                       help="Skip tracks with this name (repeatable)")
        p.add_argument("--strict", action="store_true",
                       help="Fail on a truncated trailing packet")
        return p

    add_file_parser("info", "Show summary info about a file")
    add_file_parser("tracks", "List tracks")
    add_file_parser("devices", "List devices")
    p_dump = add_file_parser("dump", "Dump samples")
    p_dump.add_argument("--limit", type=int,
                        help="Maximum samples printed per track")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "info": cmd_info,
        "tracks": cmd_tracks,
        "devices": cmd_devices,
        "dump": cmd_dump,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return

    try:
        handler(args)
    except (VitalError, OSError, EOFError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
