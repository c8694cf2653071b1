"""
Tests for logger functionality.
"""

from jobly.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self):
        logger = StructuredLogger(name="test", level="INFO", enable_console=False)

        assert logger.logger.name == "test"
        assert logger.metrics["queries_executed"] == 0
        assert logger.logger.handlers == []

    def test_file_output_when_log_dir_given(self, tmp_path):
        logger = StructuredLogger(name="test-file", log_dir=tmp_path, enable_console=False)
        logger.info("Message with context", sql="SELECT 1", params=0)

        for handler in logger.logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("jobly_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text()
        assert "Message with context" in content
        assert '"sql": "SELECT 1"' in content

    def test_record_query(self):
        logger = StructuredLogger(name="test", enable_console=False)
        logger.record_query("select", 3)
        logger.record_query("update", 1)
        logger.record_query("select", 0)

        metrics = logger.get_metrics()
        assert metrics["queries_executed"] == 3
        assert metrics["rows_returned"] == 4
        assert metrics["statements_by_kind"] == {"select": 2, "update": 1}

    def test_record_error(self):
        logger = StructuredLogger(name="test", enable_console=False)
        logger.record_error("IntegrityError")
        logger.record_error("IntegrityError")

        assert logger.get_metrics()["errors_by_type"] == {"IntegrityError": 2}

    def test_get_metrics_returns_copy(self):
        logger = StructuredLogger(name="test", enable_console=False)
        logger.get_metrics()["statements_by_kind"]["select"] = 99
        assert logger.metrics["statements_by_kind"] == {}

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test-summary", log_dir=tmp_path, enable_console=False)
        logger.record_query("select", 2)
        logger.log_metrics_summary()

        for handler in logger.logger.handlers:
            handler.flush()
        content = next(tmp_path.glob("jobly_*.log")).read_text()
        assert "Statements: 1" in content
        assert "select: 1" in content


class TestGlobalLogger:

    def test_get_logger_returns_singleton(self):
        assert get_logger() is get_logger()

    def test_reset_logger(self):
        first = get_logger()
        reset_logger()
        assert get_logger() is not first
