from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ccsend.cc_data import CCDataError, parse_cc_data
from ccsend.channels import ChannelError, select_channels
from ccsend.config import Config
from ccsend.emitter import emit
from ccsend.midi_out import open_rtmidi_output

DATA_HELP = (
    "MIDI CC data to send as <CC>:<value> pairs joined by ':' and separated by any other "
    "character(s). Both numbers are decimal, nominally 0-127. "
    'Example: "70:104 74:124,122:0" sends 104 to CC#70, 124 to CC#74 and 0 to CC#122.'
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ccsend", description="Send MIDI Control Change messages to MIDI output ports")
    ap.add_argument(
        "-p",
        "--port",
        dest="port_filter",
        help="Connect only to ports whose name contains this string (default: all ports)",
    )
    ap.add_argument(
        "-c",
        "--channel",
        type=int,
        help="Send on a single channel 1-16, 0 is treated as 1 (default: all 16 channels)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Print each skipped port and each message sent")
    ap.add_argument("data", help=DATA_HELP)
    return ap


def parse_config(argv: Optional[List[str]] = None) -> Config:
    args = build_parser().parse_args(argv)
    return Config(data=args.data, port_filter=args.port_filter, channel=args.channel, verbose=bool(args.verbose))


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_config(argv)

    # Validate everything before touching the MIDI subsystem
    try:
        pairs = parse_cc_data(cfg.data)
        channels = select_channels(cfg.channel)
    except (CCDataError, ChannelError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if cfg.verbose and not pairs:
        print("No <CC>:<value> pairs found in data; nothing to send.")

    try:
        out = open_rtmidi_output()
    except Exception as e:
        print(f"error: failed to open MIDI output: {e}", file=sys.stderr)
        return 1

    try:
        report = emit(out, pairs, channels, port_filter=cfg.port_filter, verbose=cfg.verbose)
    finally:
        out.close()

    if cfg.verbose:
        print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
