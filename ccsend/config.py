from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Names announced to the OS MIDI subsystem
CLIENT_NAME = "ccsend CC emitter"
CONNECTION_NAME = "ccsend CC emitter connection"

# MIDI protocol constants
CONTROL_CHANGE_PREFIX = 0xB0
NUM_CHANNELS = 16


@dataclass(frozen=True)
class Config:
    """Settings for one invocation, taken from the command line."""

    data: str
    port_filter: Optional[str] = None
    channel: Optional[int] = None
    verbose: bool = False
