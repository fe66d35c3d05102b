"""
Relay Lifecycle

Wires the transport to the joint dispatcher and quit handler and runs until
a /quit message arrives.

States: INITIALIZING -> RUNNING -> STOPPED. There is no way back to
RUNNING; a new Relay is needed to restart.
"""

from enum import Enum
from typing import Optional, Tuple

from .config import RelayConfig
from .control import ControlHandler, RunState
from .dispatcher import JointDispatcher, RouteContext
from .filter_table import FilterTable
from .messages import JOINT_ADDRESS, JOINT_TYPETAGS, QUIT_ADDRESS
from .transport import Destination, OSCTransport
from .utils.logging import relay_log


class RelayState(Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    STOPPED = "stopped"


class Relay:
    """
    Filtering OSC relay for joint tracking messages.
    
    Example:
        config = RelayConfig(listen_port=7110, dest_port=7111, joints=["l_hand"])
        with Relay(config) as relay:
            relay.wait()
    """
    
    def __init__(self, config: RelayConfig, transport: Optional[OSCTransport] = None):
        """
        Build the relay. No sockets are opened here.
        
        Args:
            config: Relay configuration; both ports must be set
            transport: Transport to use (a python-osc transport is created
                from the config if omitted)
                
        Raises:
            ConfigurationError: If a required port is missing
        """
        config.check_required()
        
        self.config = config
        self.state = RelayState.INITIALIZING
        self.run_state = RunState()
        
        self.filter_table = FilterTable.from_config(config)
        self.destination = Destination(config.dest_host, config.dest_port)
        self.context = RouteContext(self.filter_table, self.destination)
        
        self.transport = transport or OSCTransport(
            config.listen_ip,
            config.listen_port,
            self.destination,
            poll_interval=config.poll_interval,
        )
        self.dispatcher = JointDispatcher(self.context, self.transport)
        self.control = ControlHandler(self.run_state)
    
    @property
    def listen_address(self) -> Tuple[str, int]:
        return self.transport.listen_address
    
    def start(self) -> None:
        """
        Register handlers and start listening.
        
        Raises:
            TransportError: If the listen port or destination is unusable
        """
        if self.state != RelayState.INITIALIZING:
            raise RuntimeError(f"Relay cannot start from state {self.state.value}")
        
        if self.filter_table.is_empty:
            relay_log.warn("No joints configured; nothing will be forwarded")
        else:
            relay_log.info(f"Forwarding joints: {', '.join(self.filter_table)}")
        
        self.transport.register(
            JOINT_ADDRESS,
            self.dispatcher.on_joint_message,
            self.context,
            typetags=JOINT_TYPETAGS,
        )
        self.transport.register(QUIT_ADDRESS, self.control.on_quit_message)
        self.transport.open()
        
        self.state = RelayState.RUNNING
    
    def wait(self) -> None:
        """
        Block until the relay is stopped, then release the transport.
        
        The wait wakes immediately on /quit; the poll interval only bounds
        how long a KeyboardInterrupt can go unnoticed.
        """
        while not self.run_state.wait(self.config.poll_interval):
            pass
        self.close()
    
    def stop(self) -> None:
        """Request shutdown from the hosting process (e.g. on Ctrl+C)."""
        self.run_state.stop()
    
    def close(self) -> None:
        """Stop listening and release sockets. Safe to call more than once."""
        if self.state == RelayState.STOPPED:
            return
        
        self.run_state.stop()
        self.context.invalidate()
        self.transport.close()
        self.state = RelayState.STOPPED
        relay_log.info("Relay stopped")
    
    def run(self) -> int:
        """Start, wait for /quit and shut down. Returns the process exit code."""
        self.start()
        try:
            self.wait()
        finally:
            self.close()
        return 0
    
    def __enter__(self) -> "Relay":
        self.start()
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
