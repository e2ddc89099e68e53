from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ccsend.emitter import port_matches


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="List MIDI output ports that ccsend would connect to")
    ap.add_argument("--port", help="Substring filter to preview (same as ccsend --port)")
    args = ap.parse_args(argv)

    import mido

    try:
        names = mido.get_output_names()
    except Exception as e:
        print(f"error: failed to query MIDI outputs: {e}", file=sys.stderr)
        return 1

    print(f"Output ports ({len(names)}):")
    if not names:
        print("  (none found)")
    for i, name in enumerate(names):
        mark = "*" if args.port and port_matches(name, args.port) else " "
        print(f" {mark}[{i}] {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
