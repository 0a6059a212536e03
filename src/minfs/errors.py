"""
Error handling for the MinFS mount configuration.

This module defines the custom exceptions raised while bootstrapping
credentials and building the mount configuration.
"""

from typing import Optional


class MinFSError(Exception):
    """Base exception for all minfs related errors."""

    pass


class ConfigIOError(MinFSError):
    """Exception raised when the config directory or file cannot be accessed."""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if message else path)


class SerializationError(MinFSError):
    """Exception raised when the credential record cannot be encoded or decoded."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class ConfigError(MinFSError):
    """Exception raised when configuration is invalid."""

    pass
