import pytest

from mailcampaign.usage import MemoryUsageLogger, UsageLogger


def test_memory_logger_records_in_order():
    logger = MemoryUsageLogger()
    logger.log_request("Create", 0)
    logger.log_request("", 171)
    assert logger.requests == [("Create", 0), ("", 171)]


def test_memory_logger_starts_empty():
    assert MemoryUsageLogger().requests == []


def test_usage_logger_is_abstract():
    with pytest.raises(TypeError):
        UsageLogger()


def test_memory_logger_is_a_usage_logger():
    logger = MemoryUsageLogger()
    logger.log_request("List", 0)
    assert isinstance(logger, UsageLogger) and len(logger.requests) == 1