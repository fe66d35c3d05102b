"""
Joint Filter Table

The set of joint names whose updates are forwarded. Built once at startup
and never modified afterwards, so it can be read from the listener threads
without locking.
"""

from typing import Iterable, Iterator, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import RelayConfig


# Preset used by the hand-only relay mode (--hands)
HAND_JOINTS: Tuple[str, ...] = ("l_hand", "r_hand")


class FilterTable:
    """
    Ordered, immutable collection of joint names.
    
    Matching is exact and case-sensitive. An empty table matches nothing.
    """
    
    __slots__ = ("_names",)
    
    def __init__(self, names: Iterable[str] = ()):
        self._names: Tuple[str, ...] = tuple(names)
    
    @classmethod
    def from_config(cls, config: "RelayConfig") -> "FilterTable":
        """Build the table from the configured joint list and hand preset."""
        names = list(config.joints)
        if config.hands:
            names.extend(HAND_JOINTS)
        return cls(names)
    
    @property
    def names(self) -> Tuple[str, ...]:
        return self._names
    
    @property
    def is_empty(self) -> bool:
        return not self._names
    
    def contains(self, name: str) -> bool:
        """Return True if `name` is one of the configured joints."""
        return name in self._names
    
    def __contains__(self, name: object) -> bool:
        return name in self._names
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._names)
    
    def __len__(self) -> int:
        return len(self._names)
    
    def __repr__(self) -> str:
        return f"FilterTable({list(self._names)!r})"
