"""
Test cases for the plane geometry helpers.
"""
import math
import unittest

from handgesture.geometry import distance, offset, signed_angle_degrees


class TestDistance(unittest.TestCase):
    """Test Euclidean distance."""

    def test_pythagorean_triple(self):
        """Test a 3-4-5 triangle."""
        self.assertAlmostEqual(distance((0.0, 0.0), (0.3, 0.4)), 0.5)

    def test_same_point(self):
        """Test that a point is at distance zero from itself."""
        self.assertEqual(distance((0.25, 0.75), (0.25, 0.75)), 0.0)

    def test_nan_propagates(self):
        """Test that NaN coordinates give NaN instead of raising."""
        self.assertTrue(math.isnan(distance((float("nan"), 0.0), (0.0, 0.0))))


class TestSignedAngle(unittest.TestCase):
    """Test signed angle between two rays."""

    def test_counter_clockwise_is_positive(self):
        """Test angle from +x to +y."""
        self.assertEqual(signed_angle_degrees((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)), 90.0)

    def test_clockwise_is_negative(self):
        """Test angle from +y to +x."""
        self.assertEqual(signed_angle_degrees((0.0, 0.0), (0.0, 1.0), (1.0, 0.0)), -90.0)

    def test_vertex_offset(self):
        """Test that the angle is measured at the vertex, not the origin."""
        vertex = (0.5, 0.5)
        self.assertEqual(signed_angle_degrees(vertex, (0.6, 0.5), (0.5, 0.6)), 90.0)

    def test_result_is_whole_degrees(self):
        """Test rounding to the nearest degree."""
        # atan2(0.02, -0.01) is about 116.57 degrees
        angle = signed_angle_degrees((0.0, 0.0), (1.0, 0.0), (-0.01, 0.02))
        self.assertEqual(angle, 117.0)

    def test_near_minus_180_maps_to_180(self):
        """Test that the range is (-180, 180]."""
        angle = signed_angle_degrees((0.0, 0.0), (-1.0, 0.001), (1.0, 0.0))
        self.assertEqual(angle, 180.0)

    def test_horizontal_reference(self):
        """Test angle against a synthesized horizontal ray."""
        wrist = (0.5, 0.9)
        # Image y grows downward, so a point straight above reads as 90
        self.assertEqual(signed_angle_degrees(wrist, (0.5, 0.7), offset(wrist, 0.1)), 90.0)

    def test_nan_propagates(self):
        """Test that NaN coordinates give NaN instead of raising."""
        angle = signed_angle_degrees((float("nan"), 0.0), (1.0, 0.0), (0.0, 1.0))
        self.assertTrue(math.isnan(angle))


if __name__ == '__main__':
    unittest.main()
