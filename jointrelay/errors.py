"""Exception types raised by the relay."""

from typing import Optional


class RelayError(Exception):
    """Base class for all relay errors."""


class ConfigurationError(RelayError):
    """Required startup configuration is missing or invalid."""


class MalformedMessageError(RelayError):
    """An inbound payload does not have the expected argument shape."""


class TransportError(RelayError):
    """
    A send or receive failure reported by the OSC transport.
    
    Attributes:
        code: Numeric error code (errno for socket errors, -1 otherwise)
        message: Human-readable description
    """
    
    def __init__(self, code: int, message: str):
        super().__init__(code, message)
        self.code = code
        self.message = message
    
    def __str__(self) -> str:
        return f"transport error {self.code}: {self.message}"
    
    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        """Wrap an OSError (or python-osc error) keeping its errno if it has one."""
        code: Optional[int] = getattr(exc, "errno", None)
        message = getattr(exc, "strerror", None) or str(exc) or type(exc).__name__
        return cls(code if code is not None else -1, message)
