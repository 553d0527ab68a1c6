import dataclasses
import logging
import os
import tempfile
import unittest

from dtoracle.config import TriangulationSettings, DEFAULT_DUPLICATE_TOLERANCE, DEFAULT_GRID_SIZE
from dtoracle.errors import DuplicatePoint, DegenerateInput, TriangulationError
from dtoracle.logging_config import setup_logging


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = TriangulationSettings()
        self.assertEqual(settings.duplicate_tolerance, DEFAULT_DUPLICATE_TOLERANCE)
        self.assertEqual(DEFAULT_DUPLICATE_TOLERANCE, 0.0)
        self.assertEqual(DEFAULT_GRID_SIZE, 3)
        self.assertIsNone(settings.max_walk_steps)
        self.assertFalse(settings.check_invariants)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            TriangulationSettings().duplicate_tolerance = 1.0

    def test_invalid_values(self):
        for kwargs in ({"duplicate_tolerance": -1e-9}, {"duplicate_tolerance": float("nan")},
                       {"max_walk_steps": 0}, {"max_flips_per_insert": -1}):
            with self.assertRaises(ValueError, msg=str(kwargs)):
                TriangulationSettings(**kwargs)


class TestErrors(unittest.TestCase):

    def test_duplicate_point_message(self):
        error = DuplicatePoint(7, 2)
        self.assertEqual(str(error), "point 7 coincides with vertex 2")
        self.assertIn("at (1.0, 2.0)", str(DuplicatePoint(7, 2, (1.0, 2.0))))
        self.assertIsInstance(error, TriangulationError)

    def test_kind(self):
        self.assertEqual(DegenerateInput("x").kind, "DegenerateInput")


class TestLogging(unittest.TestCase):

    def tearDown(self):
        logging.getLogger("dtoracle").handlers.clear()

    def test_setup_logging_is_idempotent(self):
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        self.assertEqual(len(logging.getLogger("dtoracle").handlers), 1)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "dt.log")
            setup_logging(logging.INFO, log_file=path)
            logging.getLogger("dtoracle.test").info("hello")
            for handler in logging.getLogger("dtoracle").handlers:
                handler.flush()
                handler.close()
            with open(path, encoding="utf-8") as f:
                self.assertIn("hello", f.read())


if __name__ == "__main__":
    unittest.main()
