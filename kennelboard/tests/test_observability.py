import json
import logging
import unittest

from kennelboard.observability import ROOT_LOGGER, JsonFormatter, configure_logging


class ConfigureLoggingTestCase(unittest.TestCase):
    def tearDown(self) -> None:
        logging.getLogger(ROOT_LOGGER).setLevel(logging.INFO)

    def test_level_names_are_case_insensitive(self) -> None:
        logger = configure_logging("debug")
        self.assertEqual(logger.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self) -> None:
        logger = configure_logging("LOUD")
        self.assertEqual(logger.level, logging.INFO)

    def test_handler_is_installed_once(self) -> None:
        configure_logging("INFO")
        logger = configure_logging("WARNING")
        self.assertEqual(len(logger.handlers), 1)

    def test_records_render_as_json(self) -> None:
        record = logging.LogRecord(
            "kennelboard.test", logging.INFO, __file__, 1, "priced %s", ("stay",), None
        )
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["message"], "priced stay")
        self.assertEqual(payload["level"], "INFO")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
