#!/usr/bin/env python3
"""
Tests for the pure drawing helpers (no display needed).
"""

from __future__ import annotations

import unittest

from ui.helpers import bezier_points, bezier_tangent, direction_vector, heading_degrees


class HelperTests(unittest.TestCase):
    def test_bezier_samples_hit_both_ends(self) -> None:
        points = bezier_points((350.0, 305.0), (350.0, 350.0), (305.0, 350.0), n=10)
        self.assertEqual(len(points), 10)
        self.assertEqual(points[0], (350, 305))
        self.assertEqual(points[-1], (305, 350))

    def test_tangent_at_ends_follows_control_legs(self) -> None:
        p0, p1, p2 = (350.0, 305.0), (350.0, 350.0), (305.0, 350.0)
        self.assertEqual(bezier_tangent(p0, p1, p2, 0.0), (0.0, 1.0))
        self.assertEqual(bezier_tangent(p0, p1, p2, 1.0), (-1.0, 0.0))

    def test_degenerate_tangent_uses_chord(self) -> None:
        dx, dy = bezier_tangent((0.0, 0.0), (0.0, 0.0), (0.0, 0.0), 0.5)
        self.assertEqual((dx, dy), (0.0, 0.0))

    def test_heading(self) -> None:
        self.assertAlmostEqual(heading_degrees(*direction_vector("EAST")), 0.0)
        self.assertAlmostEqual(heading_degrees(*direction_vector("NORTH")), 90.0)
        self.assertAlmostEqual(heading_degrees(*direction_vector("south")), -90.0)
        self.assertEqual(direction_vector("sideways"), (1.0, 0.0))


if __name__ == "__main__":
    unittest.main()
