"""
jointrelay: filtering OSC relay for joint tracking messages.

Listens for /joint (sifff) messages, forwards the ones whose joint name is
configured to a fixed destination, and stops on /quit.
"""

from .config import RelayConfig
from .control import ControlHandler, RunState
from .dispatcher import JointDispatcher, RouteContext
from .errors import ConfigurationError, MalformedMessageError, RelayError, TransportError
from .filter_table import FilterTable, HAND_JOINTS
from .messages import JOINT_ADDRESS, QUIT_ADDRESS, JointMessage
from .relay import Relay, RelayState
from .transport import Destination, OSCTransport

__version__ = "0.1.0"

__all__ = [
    "RelayConfig",
    "ControlHandler",
    "RunState",
    "JointDispatcher",
    "RouteContext",
    "ConfigurationError",
    "MalformedMessageError",
    "RelayError",
    "TransportError",
    "FilterTable",
    "HAND_JOINTS",
    "JOINT_ADDRESS",
    "QUIT_ADDRESS",
    "JointMessage",
    "Relay",
    "RelayState",
    "Destination",
    "OSCTransport",
]
