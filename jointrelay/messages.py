"""
Joint Message Format

The relay understands two OSC addresses:

- /joint  sifff  (joint name, frame index, x, y, z)
- /quit          (no arguments, extras ignored)

python-osc decodes the datagrams; this module only checks that the decoded
arguments have the exact shape of a joint update.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from .errors import MalformedMessageError


JOINT_ADDRESS = "/joint"
QUIT_ADDRESS = "/quit"

# OSC type tag string of a well-formed joint message
JOINT_TYPETAGS = "sifff"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class JointMessage:
    """
    One tracked joint update.
    
    Attributes:
        joint: Joint name (e.g. "l_hand")
        frame: Frame index from the tracker
        x, y, z: Joint position
    """
    joint: str
    frame: int
    x: float
    y: float
    z: float
    
    @classmethod
    def from_args(cls, args: Sequence[Any]) -> "JointMessage":
        """
        Build a JointMessage from decoded OSC arguments.
        
        Args:
            args: Arguments as delivered by the python-osc dispatcher
            
        Returns:
            JointMessage with the original argument values
            
        Raises:
            MalformedMessageError: If the arguments are not exactly
                (str, int, float, float, float)
        """
        if len(args) != len(JOINT_TYPETAGS):
            raise MalformedMessageError(
                f"expected {len(JOINT_TYPETAGS)} arguments, got {len(args)}"
            )
        
        joint, frame, x, y, z = args
        
        if not isinstance(joint, str):
            raise MalformedMessageError(f"joint name must be a string, got {type(joint).__name__}")
        if not _is_int(frame):
            raise MalformedMessageError(f"frame index must be an integer, got {type(frame).__name__}")
        for axis, value in zip("xyz", (x, y, z)):
            if not isinstance(value, float):
                raise MalformedMessageError(f"{axis} must be a float, got {type(value).__name__}")
        
        return cls(joint=joint, frame=frame, x=x, y=y, z=z)
    
    def to_args(self) -> List[Any]:
        """Arguments in wire order, ready for SimpleUDPClient.send_message."""
        return [self.joint, self.frame, self.x, self.y, self.z]
