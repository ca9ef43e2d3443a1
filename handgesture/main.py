"""
Replay recorded hand tracking frames through the gesture recognizer.

Input is JSON lines, one frame per line:

    {"hand": 0, "rect": [x_center, y_center, width, height], "landmarks": [[x, y], ...]}
    {"hand": 0, "reset": true}

Each processed frame produces one JSON line on stdout.
"""
import argparse
import json
import logging
import sys
from typing import IO, Any, Dict, List, Optional

from .config import configure_logging, load_config
from .gestures import HandSessions
from .types import BoundingRect, MalformedInputError

logger = logging.getLogger(__name__)

DEFAULT_HAND = 0


def parse_rect(value: Any) -> BoundingRect:
    """Build a BoundingRect from a 4-item list or a mapping."""
    if isinstance(value, dict):
        return BoundingRect(
            x_center=float(value['x_center']),
            y_center=float(value['y_center']),
            width=float(value['width']),
            height=float(value['height'])
        )
    if value is None or len(value) != 4:
        raise MalformedInputError(f"rect must have 4 values, got {value!r}")
    x_center, y_center, width, height = (float(v) for v in value)
    return BoundingRect(x_center, y_center, width, height)


class FrameReplayer:
    """Feeds decoded frames to per-hand sessions and formats the results."""

    def __init__(self, sessions: HandSessions):
        self.sessions = sessions
        self.frames = 0
        self.errors = 0

    def handle(self, frame: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Process one decoded frame.

        Returns:
            Output record, or None for control lines
        """
        if not isinstance(frame, dict):
            raise MalformedInputError("frame must be a JSON object")

        hand = frame.get('hand', DEFAULT_HAND)
        if frame.get('reset'):
            self.sessions.drop(hand)
            return None

        rect = parse_rect(frame.get('rect'))
        result = self.sessions.process_frame(hand, rect, frame.get('landmarks'))
        self.frames += 1

        record = {'hand': hand, 'frame': self.frames}
        record.update(result.as_dict())
        return record

    def run(self, lines: IO[str], out: IO[str]) -> int:
        """Replay every line; return the number of rejected frames."""
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = self.handle(json.loads(line))
            except (MalformedInputError, KeyError, TypeError, ValueError) as e:
                # json.JSONDecodeError is a ValueError
                self.errors += 1
                logger.error("Line %d rejected: %s", lineno, e)
                continue
            if record is not None:
                out.write(json.dumps(record) + "\n")
                out.flush()

        logger.info("Processed %d frames, rejected %d", self.frames, self.errors)
        return self.errors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handgesture",
        description="Recognize hand gestures from recorded landmark frames."
    )
    parser.add_argument("--config", help="path to a YAML config file")
    parser.add_argument("--input", help="JSON lines file to replay (default: stdin)")
    parser.add_argument("--log-level", help="override the configured log level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the replay tool."""
    args = build_parser().parse_args(argv)

    cfg = load_config(args.config)
    configure_logging(cfg, args.log_level)

    replayer = FrameReplayer(HandSessions(cfg))
    if args.input:
        with open(args.input, 'r') as f:
            errors = replayer.run(f, sys.stdout)
    else:
        errors = replayer.run(sys.stdin, sys.stdout)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
