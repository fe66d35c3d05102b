"""
OSC Transport

Thin wrapper around python-osc that gives the relay what it needs:

- an inbound server running on its own listener thread, with handlers
  registered per OSC address
- an outbound client bound to one fixed destination

python-osc does all encoding and decoding. The one thing added on top is a
type tag check: python-osc decodes `d` and `h` arguments to plain float and
int, so a handler cannot tell `sifdd` from `sifff` once the values arrive.
Addresses registered with a type tag string only receive messages whose
tags match it exactly.
"""

import sys
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from pythonosc import osc_packet, osc_server, udp_client
from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_message import OscMessage
from pythonosc.parsing import osc_types
from pythonosc.osc_message_builder import BuildError

from .errors import TransportError
from .utils.logging import transport_log


@dataclass(frozen=True)
class Destination:
    """The fixed endpoint that matching messages are forwarded to."""
    host: str
    port: int
    
    @property
    def address(self) -> Tuple[str, int]:
        return (self.host, self.port)
    
    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


def message_typetags(message: OscMessage) -> str:
    """Type tag string of a decoded message, without the leading comma."""
    dgram = message.dgram
    _, index = osc_types.get_string(dgram, 0)
    if index >= len(dgram):
        return ""
    tags, _ = osc_types.get_string(dgram, index)
    return tags[1:] if tags.startswith(",") else ""


class TypedDispatcher(Dispatcher):
    """
    Dispatcher that drops packets carrying a message with the wrong type tags
    for a handler that declared the tags it expects.
    
    A bundle is dropped as a whole if any message in it is rejected.
    """
    
    def __init__(self):
        super().__init__()
        self._typetags: Dict[int, str] = {}
    
    def require_typetags(self, handler: Any, typetags: str) -> None:
        """Only invoke `handler` (as returned by map()) for messages tagged `typetags`."""
        self._typetags[id(handler)] = typetags
    
    def call_handlers_for_packet(self, data: bytes, client_address: Tuple[str, int]):
        if self._typetags and not self.accepts(data):
            return []
        return super().call_handlers_for_packet(data, client_address)
    
    def accepts(self, data: bytes) -> bool:
        """Return False if a message in `data` would reach a handler with other tags."""
        try:
            packet = osc_packet.OscPacket(data)
        except osc_packet.ParseError:
            # Left to python-osc, which drops unparseable datagrams itself
            return True
        
        for timed_msg in packet.messages:
            message = timed_msg.message
            for handler in self.handlers_for_address(message.address):
                expected = self._typetags.get(id(handler))
                if expected is None:
                    continue
                tags = message_typetags(message)
                if tags != expected:
                    transport_log.debug(
                        f"Dropped {message.address} with type tags '{tags}', expected '{expected}'"
                    )
                    return False
        return True


class _RelayServer(osc_server.ThreadingOSCUDPServer):
    """ThreadingOSCUDPServer that reports handler failures through the relay log."""
    
    daemon_threads = True
    
    def handle_error(self, request, client_address) -> None:
        exc = sys.exc_info()[1]
        if exc is None:
            return
        error = TransportError.from_exception(exc)
        transport_log.error(f"{error} (from {client_address[0]}:{client_address[1]})")


class OSCTransport:
    """
    Receives OSC messages on a UDP port and sends to a single destination.
    
    Handlers are called on python-osc's per-request threads, so they must
    be safe to run concurrently with each other and with the main thread.
    """
    
    def __init__(
        self,
        listen_ip: str,
        listen_port: int,
        destination: Destination,
        poll_interval: float = 0.1,
    ):
        """
        Initialize the transport. No sockets are opened until open().
        
        Args:
            listen_ip: Address to bind the inbound server to
            listen_port: Port to listen on (0 lets the OS choose)
            destination: Where send() delivers messages
            poll_interval: How often the server loop checks for shutdown
        """
        self.listen_ip = listen_ip
        self.listen_port = listen_port
        self.destination = destination
        self.poll_interval = poll_interval
        
        self.dispatcher = TypedDispatcher()
        self.dispatcher.set_default_handler(self._on_unrouted)
        
        self.server: Optional[_RelayServer] = None
        self.client: Optional[udp_client.SimpleUDPClient] = None
        self._thread: Optional[threading.Thread] = None
    
    @property
    def is_open(self) -> bool:
        return self.server is not None
    
    @property
    def listen_address(self) -> Tuple[str, int]:
        """Actual bound (ip, port); differs from the configured port when it was 0."""
        if self.server is None:
            return (self.listen_ip, self.listen_port)
        host, port = self.server.server_address[:2]
        return (host, port)
    
    def register(
        self,
        address: str,
        handler: Callable[..., Any],
        context: Any = None,
        typetags: Optional[str] = None,
    ) -> None:
        """
        Route messages for `address` to `handler`.
        
        The handler is called as handler(address, *args), or
        handler(address, context, *args) when a context is given.
        With `typetags` (e.g. "sifff"), messages tagged any other way are
        dropped before the handler runs.
        The handler's return value is discarded: python-osc would otherwise try to
        send a non-None result back to the sender as a reply.
        """
        if context is None:
            def invoke(osc_address: str, *args: Any) -> None:
                handler(osc_address, *args)
        else:
            def invoke(osc_address: str, *args: Any) -> None:
                handler(osc_address, context, *args)
        
        mapped = self.dispatcher.map(address, invoke)
        if typetags is not None:
            self.dispatcher.require_typetags(mapped, typetags)
    
    def open(self) -> None:
        """
        Create the outbound client and start the listener thread.
        
        Raises:
            TransportError: If the destination cannot be resolved or the
                listen port cannot be bound
        """
        if self.server is not None:
            return
        
        try:
            self.client = udp_client.SimpleUDPClient(self.destination.host, self.destination.port)
        except OSError as e:
            raise TransportError.from_exception(e) from e
        
        try:
            self.server = _RelayServer((self.listen_ip, self.listen_port), self.dispatcher)
        except OSError as e:
            self.client = None
            raise TransportError.from_exception(e) from e
        
        self._thread = threading.Thread(
            target=self.server.serve_forever,
            kwargs={"poll_interval": self.poll_interval},
            name="osc-listener",
            daemon=True,
        )
        self._thread.start()
        
        ip, port = self.listen_address
        transport_log.info(f"Listening on {ip}:{port}, forwarding to {self.destination}")
    
    def send(self, address: str, args: Sequence[Any]) -> bool:
        """
        Send one message to the destination. Best effort, never raises.
        
        Returns:
            True if the datagram was handed to the socket
        """
        client = self.client
        if client is None:
            return False
        
        try:
            client.send_message(address, list(args))
            return True
        except (OSError, BuildError) as e:
            transport_log.error(str(TransportError.from_exception(e)))
            return False
    
    def close(self) -> None:
        """Stop listening and release the outbound client."""
        server, self.server = self.server, None
        if server is not None:
            server.shutdown()
            server.server_close()
        
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        
        client, self.client = self.client, None
        if client is not None:
            client.close()
    
    def _on_unrouted(self, address: str, *args: Any) -> None:
        transport_log.debug(f"No route for {address} {list(args)}")
