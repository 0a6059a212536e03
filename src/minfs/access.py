"""
Credential bootstrap for the MinFS mount configuration.

This module makes sure a persisted credential file exists, creating it
from environment values on first run, and merges environment overrides
into the persisted values on every later run.
"""

import json
import os
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Mapping, Optional

from .errors import ConfigIOError, SerializationError
from .logging import MinFSLogger

DEFAULT_CONFIG_DIR = "/etc/minfs"
CONFIG_FILE_NAME = "config.json"
CONFIG_VERSION = "1"

ENV_ACCESS_KEY = "MINFS_ACCESS_KEY"
ENV_SECRET_KEY = "MINFS_SECRET_KEY"
ENV_SECRET_TOKEN = "MINFS_SECRET_TOKEN"

# (attribute, JSON key, environment variable)
_FIELDS = (
    ("access_key", "accessKey", ENV_ACCESS_KEY),
    ("secret_key", "secretKey", ENV_SECRET_KEY),
    ("secret_token", "secretToken", ENV_SECRET_TOKEN),
)

# (attribute, JSON key) for every serialized field
_JSON_KEYS = (("version", "version"),) + tuple((a, k) for a, k, _ in _FIELDS)


@dataclass(frozen=True)
class AccessConfig:
    """
    Access credentials and version of ``config.json``.

    Attributes:
        version: Schema tag of the record (always "1" when created here)
        access_key: Object storage access key
        secret_key: Object storage secret key
        secret_token: Optional session token
    """

    version: str = CONFIG_VERSION
    access_key: str = ""
    secret_key: str = ""
    secret_token: str = ""

    def to_json(self) -> bytes:
        """Serialize the record to compact UTF-8 JSON."""
        record = {key: getattr(self, attr) for attr, key in _JSON_KEYS}
        try:
            return json.dumps(
                record, ensure_ascii=False, separators=(",", ":")
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"could not encode credentials: {e}")

    @classmethod
    def from_json(cls, data: bytes, path: Optional[str] = None) -> "AccessConfig":
        """Parse a record.

        Keys match case-insensitively and are applied in document order, so
        a later spelling of the same key wins. Null values leave the field
        alone, missing keys default to "", unknown keys are ignored and a
        null document yields an empty record.
        """
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise SerializationError(f"could not decode credentials: {e}", path)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise SerializationError("credential record must be a JSON object", path)

        attrs = {key.lower(): (attr, key) for attr, key in _JSON_KEYS}
        values = {attr: "" for attr, _ in _JSON_KEYS}
        for name, value in raw.items():
            if name.lower() not in attrs or value is None:
                continue
            attr, key = attrs[name.lower()]
            if not isinstance(value, str):
                raise SerializationError(f"{key} must be a string", path)
            values[attr] = value
        return cls(**values)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "AccessConfig":
        """Build a fresh record from environment values."""
        return cls(
            version=CONFIG_VERSION,
            **{attr: environ.get(var, "") for attr, _, var in _FIELDS},
        )

    def with_overrides(
        self, environ: Mapping[str, str], logger: Optional[MinFSLogger] = None
    ) -> "AccessConfig":
        """Return a copy where every non-empty environment value wins."""
        overrides = {}
        for attr, _, var in _FIELDS:
            value = environ.get(var, "")
            if value:
                overrides[attr] = value
                if logger:
                    logger.log_env_override(attr, var)
        return replace(self, **overrides) if overrides else self


@dataclass(frozen=True)
class Bootstrap:
    """
    Result of the startup credential bootstrap.

    Attributes:
        access: Effective credentials (persisted values merged with environment)
        mount_time: UTC time the bootstrap started
    """

    access: AccessConfig
    mount_time: datetime


def config_file_path(config_dir: Optional[str] = None) -> str:
    """Get the path of the credential file inside a config directory."""
    return os.path.join(config_dir or DEFAULT_CONFIG_DIR, CONFIG_FILE_NAME)


def _create_access_config(
    config_file: str, environ: Mapping[str, str], logger: Optional[MinFSLogger]
) -> Optional[AccessConfig]:
    """Write a new credential file. Returns None if another process won the race."""
    access = AccessConfig.from_environ(environ)
    payload = access.to_json()

    try:
        fd = os.open(config_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    except FileExistsError:
        return None
    except OSError as e:
        raise ConfigIOError(config_file, f"could not create: {e.strerror or e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
    except OSError as e:
        raise ConfigIOError(config_file, f"could not write: {e.strerror or e}") from e

    if logger:
        logger.log_config_init(config_file)
    return access


def _load_access_config(
    config_file: str, environ: Mapping[str, str], logger: Optional[MinFSLogger]
) -> AccessConfig:
    """Read the credential file and apply environment overrides in memory."""
    try:
        with open(config_file, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ConfigIOError(config_file, f"could not read: {e.strerror or e}") from e

    access = AccessConfig.from_json(data, config_file)
    if logger:
        logger.log_config_loaded(config_file)
    return access.with_overrides(environ, logger)


def init_config(
    config_dir: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    logger: Optional[MinFSLogger] = None,
) -> Bootstrap:
    """
    Initialize the minfs credential configuration.

    On first run the credential file is created from the MINFS_ACCESS_KEY,
    MINFS_SECRET_KEY and MINFS_SECRET_TOKEN environment variables. On
    later runs the file is read and any non-empty variable overrides the
    matching field in memory only; the file itself is never rewritten.

    Args:
        config_dir: Directory holding config.json (default: /etc/minfs)
        environ: Environment mapping to read (default: os.environ)
        logger: Logger to report progress to (nothing is logged when omitted)

    Returns:
        Bootstrap holding the effective credentials and the mount start time

    Raises:
        ConfigIOError: If the directory or file cannot be created, stat'ed or read
        SerializationError: If the record cannot be encoded or decoded
    """
    config_dir = config_dir or DEFAULT_CONFIG_DIR
    environ = os.environ if environ is None else environ
    config_file = config_file_path(config_dir)

    try:
        os.makedirs(config_dir, mode=0o777, exist_ok=True)
    except OSError as e:
        raise ConfigIOError(
            config_dir, f"could not create config directory: {e.strerror or e}"
        ) from e

    mount_time = datetime.now(timezone.utc)

    try:
        os.stat(config_file)
    except FileNotFoundError:
        access = _create_access_config(config_file, environ, logger)
        if access is not None:
            return Bootstrap(access=access, mount_time=mount_time)
    except OSError as e:
        # Exists but not accessible
        raise ConfigIOError(config_file, f"could not stat: {e.strerror or e}") from e

    access = _load_access_config(config_file, environ, logger)
    return Bootstrap(access=access, mount_time=mount_time)
