from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from ccsend.cc_data import CCPair
from ccsend.config import CONNECTION_NAME
from ccsend.midi_out import CoreOutput, control_change_bytes


@dataclass
class EmitReport:
    ports_seen: int = 0
    ports_skipped: int = 0
    ports_failed: int = 0
    ports_connected: int = 0
    msgs_sent: int = 0
    msgs_failed: int = 0

    def summary(self) -> str:
        return (
            f"ports: seen={self.ports_seen} connected={self.ports_connected} "
            f"skipped={self.ports_skipped} failed={self.ports_failed}; "
            f"messages: sent={self.msgs_sent} failed={self.msgs_failed}"
        )


def port_matches(name: str, port_filter: Optional[str]) -> bool:
    """Case-sensitive substring test; no filter matches every port."""
    if not port_filter:
        return True
    return port_filter in name


def send_pairs(
    out: CoreOutput,
    pairs: Sequence[CCPair],
    channels: Sequence[int],
    verbose: bool = False,
    report: Optional[EmitReport] = None,
) -> EmitReport:
    """Send every pair on every channel over the currently open port.

    A failed send is reported to stderr and the remaining messages are
    still attempted.
    """
    report = report if report is not None else EmitReport()
    for channel in channels:
        for cc, value in pairs:
            if verbose:
                print(f"Sending CC#{cc} value {value} on ch#{channel + 1}")
            try:
                out.send(control_change_bytes(channel, cc, value))
            except Exception as e:
                report.msgs_failed += 1
                print(f"Failed to send CC#{cc} value {value} on ch#{channel + 1}: {e!r}", file=sys.stderr)
                continue
            report.msgs_sent += 1
    return report


def emit(
    out: CoreOutput,
    pairs: Sequence[CCPair],
    channels: Sequence[int],
    port_filter: Optional[str] = None,
    verbose: bool = False,
) -> EmitReport:
    """Connect to each matching output port in turn and send the CC set.

    The port count is read once. Indices can shift if devices come and go
    while this runs; a message may then reach a different port than the
    one whose name was checked. Nothing here re-validates that.
    """
    report = EmitReport()
    for port in range(out.port_count()):
        report.ports_seen += 1
        try:
            name = out.port_name(port)
        except Exception as e:
            report.ports_failed += 1
            print(f"Failed to get port #{port} name: {e}. Skipping this port.", file=sys.stderr)
            continue

        if not port_matches(name, port_filter):
            report.ports_skipped += 1
            if verbose:
                print(f'Skipping port #{port} "{name}" because it doesn\'t contain "{port_filter}"')
            continue

        if verbose:
            print(f'Connecting to port #{port} "{name}"')
        try:
            out.connect(port, CONNECTION_NAME)
        except Exception as e:
            report.ports_failed += 1
            print(f'Failed to connect to port#{port} "{name}": {e!r}', file=sys.stderr)
            continue

        report.ports_connected += 1
        try:
            send_pairs(out, pairs, channels, verbose=verbose, report=report)
        finally:
            try:
                out.close_port()
            except Exception as e:
                print(f'[warn] failed to close port #{port} "{name}": {e!r}', file=sys.stderr)
    return report
