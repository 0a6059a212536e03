"""
Logging functionality for the MinFS mount configuration.

This module provides centralized logging configuration and utilities
for consistent logging during startup.
"""

import logging
import sys


class MinFSLogger:
    """
    Custom logger for minfs startup operations.

    This class wraps a standard library logger and exposes one method
    per startup event. Credential values are never passed to it.
    """

    def __init__(self, name: str = "minfs", verbose: bool = False):
        """Initialize the logger.

        Args:
            name: Name of the logger
            verbose: Enable verbose logging mode
        """
        self.logger = logging.getLogger(name)
        self.verbose = verbose

        self._configure_logging()

    def _configure_logging(self) -> None:
        """Configure logging format and handlers."""
        # Clear any existing handlers to avoid duplicate logs
        self.logger.handlers.clear()

        log_level = logging.DEBUG if self.verbose else logging.INFO
        self.logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))

        self.logger.addHandler(console_handler)

    def log_config_init(self, config_file: str) -> None:
        """Log first-time creation of the credential file.

        Args:
            config_file: Path of the credential file being created
        """
        self.logger.warning(
            "Initializing config.json for the first time, "
            "please update your access credentials."
        )
        self.logger.debug(f"Created credential file: {config_file}")

    def log_config_loaded(self, config_file: str) -> None:
        """Log that an existing credential file was read."""
        self.logger.debug(f"Loaded credential file: {config_file}")

    def log_env_override(self, field: str, variable: str) -> None:
        """Log that an environment variable replaced a persisted field.

        Args:
            field: Name of the credential field
            variable: Environment variable that supplied the value
        """
        self.logger.debug(f"Override: {field} from {variable}")

    def log_target_parse_failed(self, target: str, error: str) -> None:
        """Log a target URL that could not be parsed."""
        self.logger.debug(f"Ignoring unparsable target {target!r}: {error}")

    def log_validation_result(self, mountpoint: str, result: str, error: str = "") -> None:
        """Log validation result.

        Args:
            mountpoint: Mountpoint of the config being validated
            result: Result of validation (pass/fail)
            error: Failure reason when result is fail
        """
        if result == "pass":
            self.logger.debug(f"Validation passed for {mountpoint or '<unset>'}")
        else:
            self.logger.warning(
                f"Validation failed for {mountpoint or '<unset>'}: {error}"
            )

    def log_config_ready(self, summary: dict, mount_time: str) -> None:
        """Log the validated configuration.

        Args:
            summary: Redacted view of the configuration
            mount_time: ISO formatted mount start time
        """
        self.logger.info(
            f"Ready: {summary.get('target')} -> {summary.get('mountpoint')}"
        )
        self.logger.debug(f"Mount time: {mount_time}")
        for key, value in summary.items():
            self.logger.debug(f"  {key}: {value}")

    def log_bootstrap_failed(self, error: str) -> None:
        """Log a fatal startup failure."""
        self.logger.error(f"Startup failed: {error}")


def get_logger(verbose: bool = False) -> MinFSLogger:
    """Get a configured logger instance.

    Args:
        verbose: Enable verbose logging mode

    Returns:
        Configured MinFSLogger instance
    """
    return MinFSLogger(verbose=verbose)
