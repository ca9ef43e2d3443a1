"""
Test cases for the frame replay tool.
"""
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from handgesture.config import load_config
from handgesture.gestures import HandSessions
from handgesture.main import FrameReplayer, main, parse_rect
from handgesture.types import BoundingRect, MalformedInputError
from tests.synthetic import make_fist, make_hand


def frame_line(rect, landmarks, hand=0) -> str:
    return json.dumps({"hand": hand, "rect": rect, "landmarks": landmarks})


class TestParseRect(unittest.TestCase):
    """Test rectangle decoding."""

    def test_list(self):
        """Test a 4-item list."""
        self.assertEqual(parse_rect([0.5, 0.4, 0.2, 0.3]), BoundingRect(0.5, 0.4, 0.2, 0.3))

    def test_mapping(self):
        """Test named fields."""
        rect = parse_rect({"x_center": 0.5, "y_center": 0.4, "width": 0.2, "height": 0.3})
        self.assertEqual(rect, BoundingRect(0.5, 0.4, 0.2, 0.3))

    def test_wrong_length(self):
        """Test that short rects are rejected."""
        with self.assertRaises(MalformedInputError):
            parse_rect([0.5, 0.5, 0.2])
        with self.assertRaises(MalformedInputError):
            parse_rect(None)


class TestFrameReplayer(unittest.TestCase):
    """Test replaying JSON lines."""

    def setUp(self):
        """Set up a replayer with default configuration."""
        self.replayer = FrameReplayer(HandSessions(load_config()))
        self.out = io.StringIO()

    def _records(self):
        return [json.loads(line) for line in self.out.getvalue().splitlines()]

    def test_replay(self):
        """Test a fist moving right over two frames."""
        lines = io.StringIO("\n".join([
            frame_line([0.3, 0.5, 0.2, 0.2], make_fist()),
            "",
            frame_line([0.5, 0.5, 0.2, 0.2], make_fist()),
        ]))

        errors = self.replayer.run(lines, self.out)

        self.assertEqual(errors, 0)
        records = self._records()
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0], {
            "hand": 0, "frame": 1, "gesture": "FIST",
            "scroll": "___", "zoom": "___", "slide": "___",
        })
        self.assertEqual(records[1]["scroll"], "right")

    def test_bad_lines_are_skipped(self):
        """Test that malformed frames are counted and do not stop the run."""
        lines = io.StringIO("\n".join([
            "not json",
            "[1, 2]",
            "42",
            frame_line([0.5, 0.5, 0.2, 0.2], make_hand()[:5]),
            json.dumps({"landmarks": make_hand()}),
            frame_line([0.5, 0.5, 0.2, 0.2], make_hand()),
        ]))

        errors = self.replayer.run(lines, self.out)

        self.assertEqual(errors, 5)
        self.assertEqual(len(self._records()), 1)

    def test_absent_hand_needs_no_landmarks(self):
        """Test a frame whose rect holds no hand."""
        lines = io.StringIO(frame_line([0.5, 0.5, 0.0, 0.0], None))
        self.assertEqual(self.replayer.run(lines, self.out), 0)
        self.assertEqual(self._records()[0]["gesture"], "___")

    def test_reset_line(self):
        """Test that a reset line ends the hand's session."""
        lines = io.StringIO("\n".join([
            frame_line([0.3, 0.5, 0.2, 0.2], make_hand(), hand="a"),
            json.dumps({"hand": "a", "reset": True}),
            frame_line([0.5, 0.5, 0.2, 0.2], make_hand(), hand="a"),
        ]))

        self.replayer.run(lines, self.out)

        records = self._records()
        self.assertEqual(len(records), 2)
        self.assertEqual(records[1]["scroll"], "___")


class TestMain(unittest.TestCase):
    """Test the command line entry point."""

    def test_input_file(self):
        """Test replaying a file and the exit status."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "frames.jsonl"
            path.write_text(frame_line([0.5, 0.5, 0.2, 0.2], make_fist()) + "\n")

            out = io.StringIO()
            with mock.patch("sys.stdout", out), mock.patch("handgesture.main.configure_logging"):
                status = main(["--input", str(path)])

        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out.getvalue())["gesture"], "FIST")

    def test_errors_set_exit_status(self):
        """Test that rejected frames give a non-zero exit status."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "frames.jsonl"
            path.write_text("{}\n")

            with mock.patch("sys.stdout", io.StringIO()), mock.patch("handgesture.main.configure_logging"):
                status = main(["--input", str(path)])

        self.assertEqual(status, 1)


if __name__ == '__main__':
    unittest.main()
