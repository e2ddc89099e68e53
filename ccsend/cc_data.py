from __future__ import annotations

import re
from typing import List, NamedTuple

# <CC>:<value>, separated by anything that does not match
CC_PAIR_RE = re.compile(r"([0-9]+):([0-9]+)")


class CCDataError(ValueError):
    pass


class CCPair(NamedTuple):
    controller: int
    value: int


def parse_byte(token: str) -> int:
    """Parse a decimal token into an unsigned 8-bit value.

    Values 128..255 are accepted even though MIDI data bytes are 7-bit;
    what a device does with them is undefined.
    """
    try:
        i = int(token, 10)
    except ValueError:
        raise CCDataError(f"Data value '{token}' could not be parsed.") from None
    if i < 0 or i > 255:
        raise CCDataError(f"Data value '{i}' is out of range.")
    return i


def parse_cc_data(data: str) -> List[CCPair]:
    """Extract (controller, value) pairs from `data` in order of appearance.

    Example: "70:104 74:124,122:0" -> [(70, 104), (74, 124), (122, 0)]
    """
    pairs: List[CCPair] = []
    for m in CC_PAIR_RE.finditer(data):
        pairs.append(CCPair(parse_byte(m.group(1)), parse_byte(m.group(2))))
    return pairs
