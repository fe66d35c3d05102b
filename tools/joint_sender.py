#!/usr/bin/env python3
"""
Joint Sender

Sends synthetic /joint messages (and optionally /quit) to a running relay,
for checking a relay setup by hand.

Usage:
    python3 tools/joint_sender.py 7110 --joint l_hand --joint l_foot
    python3 tools/joint_sender.py 7110 --quit
"""

import argparse
import math
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from jointrelay.client import RelayClient


def main():
    parser = argparse.ArgumentParser(description="Send test joint messages to a jointrelay instance.")
    parser.add_argument("port", type=int, help="Relay listen port")
    parser.add_argument("--ip", default="127.0.0.1", help="Relay host (default: 127.0.0.1)")
    parser.add_argument("--joint", action="append", default=[], help="Joint name to send (repeatable)")
    parser.add_argument("--frames", type=int, default=30, help="Number of frames per joint (default: 30)")
    parser.add_argument("--rate", type=float, default=30.0, help="Frames per second (default: 30)")
    parser.add_argument("--quit", action="store_true", help="Send /quit after the frames")
    args = parser.parse_args()
    
    joints = args.joint or ["l_hand", "r_hand"]
    interval = 1.0 / args.rate if args.rate > 0 else 0.0
    
    print(f"Sending {args.frames} frames of {joints} to {args.ip}:{args.port}")
    
    with RelayClient(args.ip, args.port) as client:
        for frame in range(args.frames):
            t = frame * interval
            for i, joint in enumerate(joints):
                # Small circle per joint so the receiver sees changing values
                x = 0.2 * math.cos(t * 2 + i)
                y = 1.0 + 0.1 * i
                z = 0.2 * math.sin(t * 2 + i)
                client.send_joint(joint, frame, x, y, z)
            if interval:
                time.sleep(interval)
        
        if args.quit:
            client.send_quit()
            print("Sent /quit")
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
