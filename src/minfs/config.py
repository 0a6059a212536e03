"""
Configuration management for the MinFS mount client.

This module holds the mount configuration assembled from a target URL
and functional options, and the validation that gates the mount.
"""

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import SplitResult

from .access import AccessConfig
from .errors import ConfigError
from .logging import MinFSLogger

# Default permission bits for mounted entries
DEFAULT_MODE = 0o660

_SECRET_FIELDS = ("access_key", "secret_key", "secret_token")


@dataclass
class Config:
    """
    Mount configuration handed to the mount/runtime layer.

    Attributes:
        bucket: Bucket name, the first path segment of the target URL
        base_path: Remaining target path segments inside the bucket
        cache: Local cache directory (optional)
        account_id: Account identifier (optional)
        access_key: Object storage access key
        secret_key: Object storage secret key
        secret_token: Optional session token
        target: Parsed target URL
        mountpoint: Local path where the bucket is exposed
        insecure: Allow insecure connections (default: False)
        debug: Enable debug output (default: False)
        uid: Owner uid applied to mounted entries (default: 0)
        gid: Owner gid applied to mounted entries (default: 0)
        mode: Default permission bits (default: 0o660)
    """

    bucket: str = ""
    base_path: str = ""
    cache: str = ""
    account_id: str = ""
    access_key: str = ""
    secret_key: str = ""
    secret_token: str = ""
    target: Optional[SplitResult] = None
    mountpoint: str = ""
    insecure: bool = False
    debug: bool = False
    uid: int = 0
    gid: int = 0
    mode: int = DEFAULT_MODE

    def validate(self) -> None:
        """Validate the config for sane values.

        Raises:
            ConfigError: If mountpoint, target or bucket is missing
        """
        if not self.mountpoint:
            raise ConfigError("mountpoint not set")

        if self.target is None:
            raise ConfigError("target not set")

        if not self.bucket:
            raise ConfigError("bucket not set")

    def redacted(self) -> dict:
        """Get a display view of the config with secrets masked."""
        view = {
            "target": _redact_url(self.target) if self.target else None,
            "mountpoint": self.mountpoint,
            "bucket": self.bucket,
            "base_path": self.base_path,
            "cache": self.cache,
            "uid": self.uid,
            "gid": self.gid,
            "mode": oct(self.mode),
            "insecure": self.insecure,
            "debug": self.debug,
        }
        for name in _SECRET_FIELDS:
            view[name] = "***" if getattr(self, name) else ""
        return view


def _redact_url(target: SplitResult) -> str:
    """Render a URL with any password replaced."""
    if target.password is None:
        return target.geturl()
    userinfo, _, host = target.netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return target._replace(netloc=f"{user}:***@{host}").geturl()


def new_config(
    target_url: str,
    *options: Callable[[Config], None],
    access: Optional[AccessConfig] = None,
    logger: Optional[MinFSLogger] = None,
) -> Config:
    """
    Build and validate a mount configuration.

    The target option is applied first, then each option in order, so a
    later option overrides an earlier one touching the same field.

    Args:
        target_url: URL of the bucket and path to mount
        *options: Options to apply to the config
        access: AccessConfig whose credentials are copied into the config
        logger: MinFSLogger that receives target parse failures

    Returns:
        The validated Config

    Raises:
        ConfigError: If the resulting config is not usable
    """
    from .options import apply_options, target

    config = apply_options(Config(), [target(target_url, logger), *options])

    if access is not None:
        config.access_key = access.access_key
        config.secret_key = access.secret_key
        config.secret_token = access.secret_token

    try:
        config.validate()
    except ConfigError as e:
        if logger:
            logger.log_validation_result(config.mountpoint, "fail", str(e))
        raise

    if logger:
        logger.log_validation_result(config.mountpoint, "pass")
    return config
