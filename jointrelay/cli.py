"""
jointrelay command line

Usage:
    jointrelay <listen_port> <write_port> [joint_name ...]

Examples:
    jointrelay 7110 7111 l_hand r_hand      # forward both hands
    jointrelay 7110 7111 --hands            # same, using the preset
    jointrelay --config relay.yaml          # ports and joints from YAML
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import RelayConfig
from .errors import ConfigurationError, TransportError
from .relay import Relay
from .utils.logging import relay_log, set_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jointrelay",
        description="Forward OSC /joint messages for selected joints to another port.",
    )
    parser.add_argument(
        "listen_port",
        type=int,
        nargs="?",
        help="Port to receive /joint and /quit messages on",
    )
    parser.add_argument(
        "write_port",
        type=int,
        nargs="?",
        help="Port on the destination host to forward matching messages to",
    )
    parser.add_argument(
        "joints",
        nargs="*",
        metavar="joint_name",
        help="Joint names to forward (exact, case-sensitive)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Destination host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--listen-ip",
        type=str,
        default=None,
        help="Address to listen on (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--hands",
        action="store_true",
        help="Also forward l_hand and r_hand",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="YAML config file (default: ~/.jointrelay/config.yaml if present)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log dropped and unrouted messages",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    
    try:
        config = RelayConfig.load(
            args.config,
            listen_port=args.listen_port,
            dest_port=args.write_port,
            dest_host=args.host,
            listen_ip=args.listen_ip,
            joints=args.joints or None,
            hands=True if args.hands else None,
            log_level="DEBUG" if args.verbose else None,
        )
        config.check_required()
    except ConfigurationError as e:
        print(f"- {e} -")
        parser.print_usage(sys.stdout)
        return 1
    
    set_log_level(config.log_level)
    
    relay = Relay(config)
    try:
        relay.start()
    except TransportError as e:
        relay_log.error(f"Cannot start relay: {e}")
        relay.close()
        return 1
    
    try:
        relay.wait()
    except KeyboardInterrupt:
        relay_log.info("Interrupted, stopping relay...")
    finally:
        relay.close()
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
