"""
Run State and Quit Handling

RunState is the relay's only mutable shared value. The /quit handler writes
it from a listener thread; the relay's wait loop reads it from the main
thread.
"""

import threading
from typing import Any, Optional

from .utils.logging import control_log


class RunState:
    """
    Running/stopped flag that can be stopped exactly once.
    
    Waiters are woken as soon as the state changes, so the main loop does
    not have to poll at a fixed interval.
    """
    
    def __init__(self):
        self._stopped = threading.Event()
        self._lock = threading.Lock()
    
    @property
    def running(self) -> bool:
        return not self._stopped.is_set()
    
    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()
    
    def stop(self) -> bool:
        """
        Transition running -> stopped.
        
        Returns:
            True if this call performed the transition, False if the state
            was already stopped
        """
        with self._lock:
            if self._stopped.is_set():
                return False
            self._stopped.set()
            return True
    
    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stopped or until `timeout` seconds pass. Returns True if stopped."""
        return self._stopped.wait(timeout)


class ControlHandler:
    """Handles /quit messages by stopping the relay."""
    
    def __init__(self, run_state: RunState):
        self.run_state = run_state
    
    def on_quit_message(self, address: str, *args: Any) -> None:
        # Any arguments are ignored; nothing is sent back
        if self.run_state.stop():
            control_log.info("quitting")
