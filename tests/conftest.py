"""
Shared test fixtures for jointrelay testing.

Provides a recording sender, an in-memory transport, a UDP sink that plays
the destination, and config helpers.
"""

import os
import socket
import pytest
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pythonosc.osc_message import OscMessage
from pythonosc.osc_message_builder import OscMessageBuilder


# ============================================================================
# Sample Messages
# ============================================================================

def joint_args(joint: str = "l_hand", frame: int = 3, x: float = 1.0, y: float = 2.0, z: float = 3.0) -> list:
    """Arguments of a well-formed /joint message, as python-osc decodes them."""
    return [joint, frame, x, y, z]


def build_dgram(address: str, typetags: str, values: Sequence[Any]) -> bytes:
    """Encode a message with explicit type tags (e.g. doubles), bypassing type inference."""
    builder = OscMessageBuilder(address=address)
    for tag, value in zip(typetags, values):
        builder.add_arg(value, arg_type=tag)
    return builder.build().dgram


MALFORMED_JOINT_ARGS = [
    [],
    ["l_hand"],
    ["l_hand", 3, 1.0, 2.0],                # too few
    ["l_hand", 3, 1.0, 2.0, 3.0, 4.0],      # too many
    [7, 3, 1.0, 2.0, 3.0],                  # name not a string
    ["l_hand", 3.0, 1.0, 2.0, 3.0],         # frame is a float
    ["l_hand", True, 1.0, 2.0, 3.0],        # frame is a bool (OSC T)
    ["l_hand", 3, 1, 2.0, 3.0],             # x is an int
    ["l_hand", 3, 1.0, "2.0", 3.0],         # y is a string
    ["l_hand", 3, 1.0, 2.0, None],          # z is nil
]


# ============================================================================
# Fakes
# ============================================================================

class RecordingSender:
    """Stands in for the transport's send side."""
    
    def __init__(self, succeed: bool = True):
        self.sent: List[Tuple[str, list]] = []
        self.succeed = succeed
    
    def send(self, address: str, args: Sequence[Any]) -> bool:
        self.sent.append((address, list(args)))
        return self.succeed


class FakeTransport(RecordingSender):
    """
    In-memory transport with the OSCTransport interface.
    
    deliver() calls the registered handler the same way the python-osc
    transport does.
    """
    
    def __init__(self):
        super().__init__()
        self.routes: Dict[str, Tuple[Callable[..., Any], Any]] = {}
        self.typetags: Dict[str, Optional[str]] = {}
        self.opened = False
        self.closed = False
    
    @property
    def is_open(self) -> bool:
        return self.opened and not self.closed
    
    @property
    def listen_address(self) -> Tuple[str, int]:
        return ("127.0.0.1", 7110)
    
    def register(
        self,
        address: str,
        handler: Callable[..., Any],
        context: Any = None,
        typetags: Optional[str] = None,
    ) -> None:
        self.routes[address] = (handler, context)
        self.typetags[address] = typetags
    
    def open(self) -> None:
        self.opened = True
    
    def close(self) -> None:
        self.closed = True
    
    def deliver(self, address: str, *args: Any) -> None:
        handler, context = self.routes[address]
        if context is None:
            handler(address, *args)
        else:
            handler(address, context, *args)


class UDPSink:
    """A bound UDP socket that receives what the relay forwards."""
    
    def __init__(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
    
    @property
    def port(self) -> int:
        return self.sock.getsockname()[1]
    
    def receive_raw(self, timeout: float = 2.0) -> Optional[bytes]:
        self.sock.settimeout(timeout)
        try:
            data, _ = self.sock.recvfrom(65536)
        except socket.timeout:
            return None
        return data
    
    def receive(self, timeout: float = 2.0) -> Optional[OscMessage]:
        data = self.receive_raw(timeout)
        if data is None:
            return None
        return OscMessage(data)
    
    def close(self) -> None:
        self.sock.close()


# ============================================================================
# Pytest Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and JOINTRELAY_* variables out of tests."""
    import jointrelay.config
    from jointrelay.utils.logging import set_log_level
    
    monkeypatch.setattr(jointrelay.config, "CONFIG_PATH", tmp_path / "no-config.yaml")
    for key in list(os.environ):
        if key.startswith("JOINTRELAY_"):
            monkeypatch.delenv(key)
    
    yield
    
    set_log_level("INFO")


@pytest.fixture
def make_config():
    """Factory for RelayConfig with test-friendly defaults."""
    from jointrelay.config import RelayConfig
    
    def _make(**overrides):
        values = dict(listen_ip="127.0.0.1", listen_port=0, dest_port=7111)
        values.update(overrides)
        return RelayConfig(**values)
    
    return _make


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def udp_sink():
    sink = UDPSink()
    yield sink
    sink.close()
