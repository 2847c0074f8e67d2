"""Unit tests for filterflow.logger."""

import logging
from pathlib import Path

from filterflow.logger import FilterFlowLogger, logger


class TestFilterFlowLogger:
    """Test suite for the FilterFlow logger singleton."""

    def test_singleton(self):
        assert FilterFlowLogger() is logger

    def test_set_level(self):
        logger.set_level("warning")

        assert logging.getLogger("filterflow").level == logging.WARNING
        logger.set_level("INFO")

    def test_enable_file_logging(self, tmp_path):
        log_file = logger.enable_file_logging("unit", tmp_path / "logs", "DEBUG")

        logger.info("hello from the test")

        path = Path(log_file)
        assert path.parent == tmp_path / "logs"
        assert path.name.startswith("unit_")
        assert logger.log_file == log_file
        assert "hello from the test" in path.read_text()

    def test_disable_file_logging(self, tmp_path):
        logger.enable_file_logging("unit", tmp_path)

        logger.disable_file_logging()

        assert logger.log_file is None

    def test_file_records_point_at_caller(self, tmp_path):
        """Test records name the calling function rather than the logger wrapper."""
        log_file = logger.enable_file_logging("unit", tmp_path, "DEBUG")

        logger.warning("caller check")

        assert "[test_logger.test_file_records_point_at_caller]" in Path(log_file).read_text()
