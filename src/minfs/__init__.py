# MinFS mount configuration package

from .access import AccessConfig, Bootstrap, init_config
from .config import Config, new_config
from .errors import ConfigError, ConfigIOError, MinFSError, SerializationError
from .options import (
    apply_options,
    cache_dir,
    debug,
    insecure,
    mountpoint,
    parse_mount_options,
    set_gid,
    set_uid,
    target,
)
from .version import __version__

__all__ = [
    "AccessConfig",
    "Bootstrap",
    "init_config",
    "Config",
    "new_config",
    "MinFSError",
    "ConfigError",
    "ConfigIOError",
    "SerializationError",
    "apply_options",
    "cache_dir",
    "debug",
    "insecure",
    "mountpoint",
    "parse_mount_options",
    "set_gid",
    "set_uid",
    "target",
    "__version__",
]
