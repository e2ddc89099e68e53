from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from ccsend.config import CLIENT_NAME, CONNECTION_NAME, CONTROL_CHANGE_PREFIX


class PortNameError(ValueError):
    pass


def control_change_bytes(channel: int, control: int, value: int) -> List[int]:
    """Build a raw 3-byte Control Change message.

    Bytes are passed through as given; values above 127 are not masked.
    """
    return [CONTROL_CHANGE_PREFIX | int(channel), int(control), int(value)]


class CoreOutput:
    """Abstract MIDI output interface used by the emitter.

    One port can be open at a time: connect(), send() any number of
    messages, then close_port() before connecting to the next index.
    """

    def port_count(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def port_name(self, index: int) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def connect(self, index: int, name: str = CONNECTION_NAME) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def send(self, message: Sequence[int]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def close_port(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class RtMidiOutput(CoreOutput):
    """CoreOutput backed by a python-rtmidi MidiOut client.

    rtmidi sends raw bytes, so out-of-range data bytes reach the driver
    unchanged, which mido.Message would reject.
    """

    def __init__(self, midi_out):
        self.out = midi_out

    def port_count(self) -> int:
        return int(self.out.get_port_count())

    def port_name(self, index: int) -> str:
        try:
            name = self.out.get_port_name(index)
        except Exception as e:
            raise PortNameError(f"{type(e).__name__}: {e}") from e
        # rtmidi returns None for an invalid or vanished port number
        if name is None:
            raise PortNameError(f"no name reported for port #{index}")
        return name

    def connect(self, index: int, name: str = CONNECTION_NAME) -> None:
        self.out.open_port(index, name)

    def send(self, message: Sequence[int]) -> None:
        self.out.send_message(list(message))

    def close_port(self) -> None:
        self.out.close_port()

    def close(self) -> None:
        self.out.close_port()
        self.out.delete()


def open_rtmidi_output(client_name: str = CLIENT_NAME) -> RtMidiOutput:
    """Create the platform MIDI output client.

    Raises whatever rtmidi raises (ImportError, rtmidi.SystemError) when
    the system MIDI stack is unavailable; callers treat that as fatal.
    """
    import rtmidi

    return RtMidiOutput(rtmidi.MidiOut(name=client_name))


class VirtualOutput(CoreOutput):
    """In-memory CoreOutput for tests and dry runs.

    `ports` lists port names; None stands for a port whose name cannot be
    read. Failures can be injected per port index (`fail_connect`) or per
    message (`fail_send`, matched against (port, bytes)).
    """

    def __init__(
        self,
        ports: Sequence[Optional[str]] = (),
        fail_connect: Optional[Set[int]] = None,
        fail_send: Optional[Set[Tuple[int, Tuple[int, int, int]]]] = None,
    ) -> None:
        self.ports = list(ports)
        self.fail_connect = set(fail_connect or ())
        self.fail_send = set(fail_send or ())
        self.sent: Dict[int, List[List[int]]] = {}
        self.attempts: List[Tuple[int, List[int]]] = []
        self.connections: List[Tuple[int, str]] = []
        self.current: Optional[int] = None
        self.closed = False

    def port_count(self) -> int:
        return len(self.ports)

    def port_name(self, index: int) -> str:
        if index >= len(self.ports) or self.ports[index] is None:
            raise PortNameError(f"no name reported for port #{index}")
        return self.ports[index]

    def connect(self, index: int, name: str = CONNECTION_NAME) -> None:
        if self.current is not None:
            raise RuntimeError(f"port #{self.current} is still open")
        if index in self.fail_connect:
            raise RuntimeError(f"cannot open port #{index}")
        self.current = index
        self.connections.append((index, name))

    def send(self, message: Sequence[int]) -> None:
        if self.current is None:
            raise RuntimeError("no port open")
        msg = list(message)
        self.attempts.append((self.current, msg))
        if (self.current, tuple(msg)) in self.fail_send:
            raise RuntimeError(f"send failed: {msg}")
        self.sent.setdefault(self.current, []).append(msg)

    def close_port(self) -> None:
        self.current = None

    def close(self) -> None:
        self.current = None
        self.closed = True
