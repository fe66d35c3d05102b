"""
Joint Message Dispatcher

Decides, for every inbound /joint message, whether it is forwarded.

The dispatcher is handed a RouteContext when it is registered with the
transport. Messages that arrive with any other context, or after the
context has been invalidated, are ignored.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from .errors import MalformedMessageError
from .filter_table import FilterTable
from .messages import JointMessage
from .transport import Destination
from .utils.logging import dispatch_log


class Sender(Protocol):
    def send(self, address: str, args: Sequence[Any]) -> bool: ...


@dataclass(eq=False)
class RouteContext:
    """
    Read-only routing data shared with the listener threads.
    
    Attributes:
        filter_table: Joints eligible for forwarding
        destination: Where matching messages go
    """
    filter_table: FilterTable
    destination: Destination
    _valid: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    
    def __post_init__(self):
        self._valid.set()
    
    @property
    def valid(self) -> bool:
        return self._valid.is_set()
    
    def invalidate(self) -> None:
        """Mark the context as belonging to a relay that has shut down."""
        self._valid.clear()


class JointDispatcher:
    """
    Filters joint messages and forwards the matching ones unmodified.
    """
    
    def __init__(self, context: RouteContext, sender: Sender):
        """
        Args:
            context: The routing context this dispatcher was registered with
            sender: Object with send(address, args) toward the destination
        """
        self.context = context
        self.sender = sender
    
    def on_joint_message(self, address: str, context: Any, *args: Any) -> bool:
        """
        Handle one decoded /joint message.
        
        Args:
            address: OSC address the message arrived on
            context: Context passed through the transport registration
            *args: Decoded OSC arguments
            
        Returns:
            Always True: malformed and foreign messages count as handled so
            the transport does not treat them as unrouted
        """
        if context is not self.context or not context.valid:
            return True
        
        try:
            msg = JointMessage.from_args(args)
        except MalformedMessageError as e:
            dispatch_log.debug(f"Dropped malformed {address} message: {e}")
            return True
        
        if context.filter_table.contains(msg.joint):
            self.sender.send(address, msg.to_args())
        
        return True
