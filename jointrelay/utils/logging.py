"""
jointrelay Logging Utility

Provides timestamped console logging for all relay components.
"""

import sys
from datetime import datetime
from typing import Optional


LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "ERROR": 40,
}

_min_level = LEVELS["INFO"]


def set_log_level(level: str) -> None:
    """
    Set the minimum level that gets printed.
    
    Args:
        level: One of DEBUG, INFO, WARN, ERROR (case-insensitive)
    """
    global _min_level
    
    key = level.upper()
    if key == "WARNING":
        key = "WARN"
    if key not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    _min_level = LEVELS[key]


def log(message: str, level: str = "INFO", component: Optional[str] = None) -> None:
    """
    Print a timestamped log message.
    
    Args:
        message: The message to log
        level: Log level (INFO, WARN, ERROR, DEBUG)
        component: Optional component name (e.g., "Relay", "Transport")
    """
    if LEVELS.get(level, LEVELS["INFO"]) < _min_level:
        return
    
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]  # HH:MM:SS.mmm
    
    if component:
        prefix = f"[{timestamp}] [{level}] [{component}]"
    else:
        prefix = f"[{timestamp}] [{level}]"
    
    # Handlers run on listener threads; flush so lines are not held back
    print(f"{prefix} {message}", file=sys.stdout, flush=True)


def log_info(message: str, component: Optional[str] = None) -> None:
    """Log an info message."""
    log(message, "INFO", component)


def log_warn(message: str, component: Optional[str] = None) -> None:
    """Log a warning message."""
    log(message, "WARN", component)


def log_error(message: str, component: Optional[str] = None) -> None:
    """Log an error message."""
    log(message, "ERROR", component)


def log_debug(message: str, component: Optional[str] = None) -> None:
    """Log a debug message."""
    log(message, "DEBUG", component)


class ComponentLogger:
    """Logger bound to a specific component."""
    
    def __init__(self, component: str):
        self.component = component
    
    def info(self, message: str) -> None:
        log_info(message, self.component)
    
    def warn(self, message: str) -> None:
        log_warn(message, self.component)
    
    def error(self, message: str) -> None:
        log_error(message, self.component)
    
    def debug(self, message: str) -> None:
        log_debug(message, self.component)


# Pre-configured loggers for the relay components
relay_log = ComponentLogger("Relay")
transport_log = ComponentLogger("Transport")
dispatch_log = ComponentLogger("Dispatch")
control_log = ComponentLogger("Control")
