"""
jointrelay Configuration Management

Handles loading/saving of relay settings.
Uses Pydantic for validation and YAML for human-readable config files.
"""

from pathlib import Path
from typing import Optional, List, Dict, Any
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
import yaml

from .errors import ConfigurationError


# Default paths
CONFIG_DIR = Path.home() / ".jointrelay"
CONFIG_PATH = CONFIG_DIR / "config.yaml"

# Destination host of the reference setup (tracker and consumer on one machine)
DEFAULT_DEST_HOST = "127.0.0.1"


class RelayConfig(BaseSettings):
    """Main configuration container."""
    # Inbound socket
    listen_ip: str = "0.0.0.0"
    listen_port: Optional[int] = Field(default=None, ge=0, le=65535)  # 0 = pick a free port
    
    # Outbound destination
    dest_host: str = DEFAULT_DEST_HOST
    dest_port: Optional[int] = Field(default=None, ge=1, le=65535)
    
    # Filtering
    joints: List[str] = Field(default_factory=list)
    hands: bool = False  # Add l_hand / r_hand to the filter table
    
    # Runtime
    poll_interval: float = Field(default=0.1, gt=0.0, le=5.0)  # seconds
    log_level: str = "INFO"
    
    class Config:
        env_prefix = "JOINTRELAY_"
    
    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value == "WARNING":
            value = "WARN"
        if value not in ("DEBUG", "INFO", "WARN", "ERROR"):
            raise ValueError(f"unknown log level {value!r}")
        return value
    
    @classmethod
    def load(cls, path: Optional[Path] = None, **overrides: Any) -> "RelayConfig":
        """
        Load configuration from a YAML file.
        
        Args:
            path: YAML file (defaults to ~/.jointrelay/config.yaml if it exists)
            **overrides: Values that take precedence over the file,
                e.g. ports given on the command line. None values are ignored.
                
        Raises:
            ConfigurationError: If the file cannot be read or a value is invalid
        """
        explicit = path is not None
        if path is None:
            path = CONFIG_PATH
        
        data: Dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, 'r') as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")
        elif explicit:
            raise ConfigurationError(f"Config file not found: {path}")
        
        data.update({k: v for k, v in overrides.items() if v is not None})
        
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
    
    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to YAML file."""
        if path is None:
            path = CONFIG_PATH
        
        path.parent.mkdir(parents=True, exist_ok=True)
        
        with open(path, 'w') as f:
            yaml.dump(self.model_dump(mode='json'), f, default_flow_style=False)
    
    def check_required(self) -> None:
        """
        Make sure both ports are configured.
        
        Raises:
            ConfigurationError: If the listen or write port is missing
        """
        missing = []
        if self.listen_port is None:
            missing.append("listen_port")
        if self.dest_port is None:
            missing.append("write_port")
        if missing:
            raise ConfigurationError(f"Missing argument: {', '.join(missing)}")
