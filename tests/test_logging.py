#!/usr/bin/env python3
"""
Test suite for the logging module.

This module tests the logging functionality for the minfs startup.
"""

import logging

import pytest

from minfs.logging import MinFSLogger, get_logger


class TestMinFSLoggerInitialization:
    """Test logger initialization."""

    def test_default_level(self):
        """Test that a non-verbose logger logs at INFO."""
        logger = MinFSLogger("test_init", verbose=False)
        assert logger.logger.level == logging.INFO
        assert len(logger.logger.handlers) == 1

    def test_verbose_level(self):
        """Test that a verbose logger logs at DEBUG."""
        logger = MinFSLogger("test_init_verbose", verbose=True)
        assert logger.logger.level == logging.DEBUG
        assert logger.logger.handlers[0].level == logging.DEBUG

    def test_reconfigure_does_not_duplicate_handlers(self):
        """Test that creating the same logger twice keeps a single handler."""
        MinFSLogger("test_init_dup")
        logger = MinFSLogger("test_init_dup")
        assert len(logger.logger.handlers) == 1


class TestMinFSLoggerBootstrap:
    """Test credential bootstrap logging."""

    def test_log_config_init(self, logger, mocker):
        """Test the first-run warning."""
        mock_warning = mocker.patch.object(logger.logger, "warning")
        logger.log_config_init("/etc/minfs/config.json")
        mock_warning.assert_called_once_with(
            "Initializing config.json for the first time, "
            "please update your access credentials."
        )

    def test_log_config_loaded(self, logger, mocker):
        mock_debug = mocker.patch.object(logger.logger, "debug")
        logger.log_config_loaded("/etc/minfs/config.json")
        mock_debug.assert_called_once_with(
            "Loaded credential file: /etc/minfs/config.json"
        )

    def test_log_env_override(self, logger, mocker):
        """Test that overrides are logged by field and variable name."""
        mock_debug = mocker.patch.object(logger.logger, "debug")
        logger.log_env_override("access_key", "MINFS_ACCESS_KEY")
        mock_debug.assert_called_once_with("Override: access_key from MINFS_ACCESS_KEY")

    def test_log_bootstrap_failed(self, logger, mocker):
        mock_error = mocker.patch.object(logger.logger, "error")
        logger.log_bootstrap_failed("bucket not set")
        mock_error.assert_called_once_with("Startup failed: bucket not set")


class TestMinFSLoggerConfig:
    """Test configuration build logging."""

    @pytest.fixture
    def logger(self):
        """Create a logger instance for testing."""
        return MinFSLogger("test_logger_config", verbose=True)

    def test_log_target_parse_failed(self, logger, mocker):
        mock_debug = mocker.patch.object(logger.logger, "debug")
        logger.log_target_parse_failed("http://[::1", "Invalid IPv6 URL")
        mock_debug.assert_called_once_with(
            "Ignoring unparsable target 'http://[::1': Invalid IPv6 URL"
        )

    def test_log_validation_passed(self, logger, mocker):
        mock_debug = mocker.patch.object(logger.logger, "debug")
        logger.log_validation_result("/mnt/x", "pass")
        mock_debug.assert_called_once_with("Validation passed for /mnt/x")

    def test_log_validation_failed_without_mountpoint(self, logger, mocker):
        """Test that a missing mountpoint is shown as unset."""
        mock_warning = mocker.patch.object(logger.logger, "warning")
        logger.log_validation_result("", "fail", "mountpoint not set")
        mock_warning.assert_called_once_with(
            "Validation failed for <unset>: mountpoint not set"
        )

    def test_log_config_ready(self, logger, mocker):
        """Test that the ready line names target and mountpoint."""
        mock_info = mocker.patch.object(logger.logger, "info")
        mock_debug = mocker.patch.object(logger.logger, "debug")
        logger.log_config_ready(
            {"target": "https://h/b", "mountpoint": "/mnt/x", "uid": 0},
            "2026-01-01T00:00:00+00:00",
        )
        mock_info.assert_called_once_with("Ready: https://h/b -> /mnt/x")
        mock_debug.assert_any_call("Mount time: 2026-01-01T00:00:00+00:00")
        mock_debug.assert_any_call("  uid: 0")


def test_get_logger():
    """Test the get_logger factory."""
    logger = get_logger(verbose=True)
    assert isinstance(logger, MinFSLogger)
    assert logger.verbose is True
    assert logger.logger.name == "minfs"
