"""
Tests for GPS projections and live position intake
"""

import unittest

from campus_geofence.core import Session
from campus_geofence.errors import LocationSourceError, LocationUnavailable
from campus_geofence.intake import (
    BoundingBoxProjection,
    FractionalProjection,
    PositionIntake,
    create_projection,
)
from campus_geofence.models import Coordinate, Student

SQUARE = [(10, 10), (90, 10), (90, 90), (10, 90)]


class TestProjections(unittest.TestCase):
    """Test raw GPS -> plane projections."""

    def test_fractional(self):
        """Test the placeholder projection keeps decimal digits 2-5."""
        position = FractionalProjection()(12.971234, 77.594567)

        self.assertAlmostEqual(position.latitude, 12.34, places=4)
        self.assertAlmostEqual(position.longitude, 45.67, places=4)

    def test_fractional_negative(self):
        """Test negative degrees still land in [0, 100)."""
        position = FractionalProjection()(-33.865143, -151.209900)

        self.assertGreaterEqual(position.latitude, 0)
        self.assertLess(position.latitude, 100)
        self.assertGreaterEqual(position.longitude, 0)
        self.assertLess(position.longitude, 100)

    def test_bounding_box_linear(self):
        """Test the box maps linearly onto the plane."""
        projection = BoundingBoxProjection(0, 10, 20, 40)

        self.assertEqual(projection(5, 30), Coordinate(50, 50))
        self.assertEqual(projection(0, 20), Coordinate(0, 0))

    def test_bounding_box_clamps(self):
        """Test readings outside the box stay on the plane edge."""
        projection = BoundingBoxProjection(0, 10, 0, 10)

        self.assertEqual(projection(25, -5), Coordinate(100, 0))

    def test_bounding_box_rejects_empty(self):
        """Test a degenerate box is rejected."""
        with self.assertRaises(ValueError):
            BoundingBoxProjection(10, 10, 0, 5)

    def test_create_projection(self):
        """Test the projection factory."""
        self.assertIsInstance(create_projection({"type": "fractional"}), FractionalProjection)
        bbox = create_projection(
            {"type": "bbox", "min_lat": 0, "max_lat": 1, "min_lng": 0, "max_lng": 1}
        )
        self.assertIsInstance(bbox, BoundingBoxProjection)

        with self.assertRaises(ValueError):
            create_projection({"type": "mercator"})


class TestPositionIntake(unittest.TestCase):
    """Test live report handling."""

    def setUp(self):
        self.session = Session(
            SQUARE, [Student(id="live", name="Liv", is_live_tracked=True)]
        )
        self.intake = PositionIntake(self.session, BoundingBoxProjection(0, 1, 0, 1))

    def test_report_stores_projected(self):
        """Test a report is projected then stored."""
        self.assertTrue(self.intake.report("live", 0.25, 0.75))

        self.assertEqual(self.session.students()[0].position, Coordinate(25, 75))

    def test_report_unknown_student(self):
        """Test reports for unknown ids are dropped."""
        self.assertFalse(self.intake.report("ghost", 0.5, 0.5))

    def test_report_failure(self):
        """Test a failure is returned, logged, and leaves state untouched."""
        with self.assertLogs("campus_geofence.intake.position", level="WARNING"):
            error = self.intake.report_failure("live", "permission denied")

        self.assertIsInstance(error, LocationUnavailable)
        self.assertEqual(error.entity_id, "live")
        self.assertEqual(error.reason, "permission denied")
        self.assertIsNone(self.session.students()[0].position)
        self.assertEqual(self.session.alerts(), [])

    def test_poll_success(self):
        """Test polling a working source stores the reading."""
        self.assertTrue(self.intake.poll("live", lambda: (0.5, 0.5)))
        self.assertEqual(self.session.students()[0].position, Coordinate(50, 50))

    def test_poll_source_error(self):
        """Test a failing source is reported, not raised."""

        def denied():
            raise LocationSourceError("permission denied")

        with self.assertLogs("campus_geofence.intake.position", level="WARNING"):
            self.assertFalse(self.intake.poll("live", denied))
        self.assertIsNone(self.session.students()[0].position)

    def test_report_non_finite_reading(self):
        """Test NaN and infinite readings are reported as failures."""
        for raw in [(float("nan"), 0.5), (0.5, float("-inf"))]:
            with self.subTest(raw=raw):
                with self.assertLogs("campus_geofence.intake.position", level="WARNING"):
                    self.assertFalse(self.intake.report("live", *raw))
        self.assertIsNone(self.session.students()[0].position)

    def test_poll_infinite_reading_fractional(self):
        """Test an infinite reading from a source comes back as a failure."""
        intake = PositionIntake(self.session)

        with self.assertLogs("campus_geofence.intake.position", level="WARNING") as logs:
            self.assertFalse(intake.poll("live", lambda: (float("inf"), 77.5)))

        self.assertIn("live", logs.output[0])
        self.assertIsNone(self.session.students()[0].position)
        self.assertEqual(self.session.alerts(), [])

    def test_default_projection(self):
        """Test intake falls back to the fractional projection."""
        intake = PositionIntake(self.session)
        self.assertIsInstance(intake.projection, FractionalProjection)


if __name__ == "__main__":
    unittest.main()
