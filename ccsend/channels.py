from __future__ import annotations

from typing import List, Optional

from ccsend.config import NUM_CHANNELS


class ChannelError(ValueError):
    pass


def select_channels(channel: Optional[int]) -> List[int]:
    """Map a human 1-based channel argument to zero-based wire channels.

    None selects all 16 channels. 0 is treated as channel 1.
    """
    if channel is None:
        return list(range(NUM_CHANNELS))
    ch = int(channel)
    if ch < 0:
        raise ChannelError(f"Channel {ch} is below minimum of 0")
    if ch > NUM_CHANNELS:
        raise ChannelError(f"Channel {ch} exceeds maximum of {NUM_CHANNELS}")
    if ch == 0:
        return [0]
    return [ch - 1]
