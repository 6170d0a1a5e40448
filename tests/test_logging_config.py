"""Package logger setup tests."""

from __future__ import annotations

import logging
import os
import tempfile
import unittest

from gitlane.logging_config import setup_logging


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        setup_logging()

    def test_default_drops_records(self) -> None:
        logger = setup_logging()

        self.assertFalse(logger.propagate)
        self.assertEqual(logger.level, logging.INFO)
        self.assertTrue(all(isinstance(h, logging.NullHandler) for h in logger.handlers))

    def test_log_file_receives_debug_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "gitlane.log")
            logger = setup_logging(verbose=True, log_file=path)
            logging.getLogger("gitlane.git").debug("running git log")
            for handler in logger.handlers:
                handler.flush()
            setup_logging()

            with open(path, encoding="utf-8") as handle:
                content = handle.read()

        self.assertIn("gitlane.git - DEBUG - running git log", content)


if __name__ == "__main__":
    unittest.main()
