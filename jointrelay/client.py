"""
Relay Test Client

Sends /joint and /quit messages to a running relay. Used by the
tools/joint_sender.py script and by the integration tests.
"""

from typing import Any, Optional, Sequence
from pythonosc import udp_client

from .messages import JOINT_ADDRESS, QUIT_ADDRESS, JointMessage


class RelayClient:
    """
    Minimal OSC sender aimed at a relay's listen port.
    """
    
    def __init__(self, ip: str = "127.0.0.1", port: int = 7110):
        """
        Args:
            ip: Relay host
            port: Relay listen port
        """
        self.ip = ip
        self.port = port
        self.client: Optional[udp_client.SimpleUDPClient] = None
    
    def connect(self) -> None:
        """Create the underlying UDP client."""
        if self.client is None:
            self.client = udp_client.SimpleUDPClient(self.ip, self.port)
    
    def disconnect(self) -> None:
        """Close the UDP client."""
        client, self.client = self.client, None
        if client is not None:
            client.close()
    
    def send(self, address: str, args: Sequence[Any] = ()) -> None:
        """Send a raw message; python-osc infers the type tags from the values."""
        self.connect()
        self.client.send_message(address, list(args))
    
    def send_joint(self, joint: str, frame: int, x: float, y: float, z: float) -> None:
        """Send a well-formed /joint message (type tags sifff)."""
        msg = JointMessage(joint, int(frame), float(x), float(y), float(z))
        self.send(JOINT_ADDRESS, msg.to_args())
    
    def send_quit(self) -> None:
        """Ask the relay to shut down."""
        self.send(QUIT_ADDRESS)
    
    def __enter__(self) -> "RelayClient":
        self.connect()
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()
