#!/usr/bin/env python3
"""
jointrelay launcher

Runs the relay from a source checkout without installing it.

Usage:
    python run_relay.py <listen_port> <write_port> [joint_name ...]
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from jointrelay.cli import main


if __name__ == "__main__":
    sys.exit(main())
