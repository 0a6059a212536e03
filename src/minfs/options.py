"""
Functional options for building a MinFS mount configuration.

Each option is a callable that mutates exactly one concern of a Config.
Options are applied in order, so the last one touching a field wins.
"""

import posixpath
import re
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import SplitResult, unquote, urlsplit

from .config import Config
from .errors import ConfigError
from .logging import MinFSLogger

Option = Callable[[Config], None]

MAX_ID = 2**32 - 1

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_target(url: str) -> SplitResult:
    """Parse a target URL.

    Raises:
        ValueError: If the URL is malformed
    """
    if _CONTROL_CHARS.search(url):
        raise ValueError("invalid control character in URL")
    if url.startswith(":"):
        raise ValueError("missing protocol scheme")
    if _BAD_ESCAPE.search(url):
        raise ValueError("invalid URL escape")

    result = urlsplit(url)
    # Accessing the port validates it
    result.port
    # Escapes must decode to UTF-8
    unquote(result.path, errors="strict")
    return result


def split_target_path(path: str) -> Tuple[str, str]:
    """Split a URL path into bucket and base path.

    Paths of one character or less ("" or "/") yield ("", "").
    """
    if len(path) <= 1:
        return "", ""

    parts = (path[1:] if path.startswith("/") else path).split("/")
    rest = [part for part in parts[1:] if part]
    base_path = posixpath.normpath("/".join(rest)) if rest else ""
    return parts[0], base_path


def mountpoint(path: str) -> Option:
    """Configure the target mountpoint."""

    def apply(config: Config) -> None:
        config.mountpoint = path

    return apply


def target(url: str, logger: Optional[MinFSLogger] = None) -> Option:
    """Set the target URL and derive bucket and base path from it.

    A URL that fails to parse leaves the config untouched; validation
    reports the missing target or bucket later.
    """

    def apply(config: Config) -> None:
        try:
            parsed = parse_target(url)
        except ValueError as e:
            if logger:
                logger.log_target_parse_failed(url, str(e))
            return

        config.target = parsed
        path = unquote(parsed.path, errors="strict")
        if len(path) > 1:
            config.bucket, config.base_path = split_target_path(path)

    return apply


def cache_dir(path: str) -> Option:
    """Set the cache directory path."""

    def apply(config: Config) -> None:
        config.cache = path

    return apply


def _check_id(name: str, value: int) -> int:
    if not 0 <= value <= MAX_ID:
        raise ValueError(f"{name} out of range: {value}")
    return value


def set_uid(uid: int) -> Option:
    """Set a custom uid for the mount."""
    uid = _check_id("uid", uid)

    def apply(config: Config) -> None:
        config.uid = uid

    return apply


def set_gid(gid: int) -> Option:
    """Set a custom gid for the mount."""
    gid = _check_id("gid", gid)

    def apply(config: Config) -> None:
        config.gid = gid

    return apply


def insecure() -> Option:
    """Enable insecure mode."""

    def apply(config: Config) -> None:
        config.insecure = True

    return apply


def debug() -> Option:
    """Enable debug logging."""

    def apply(config: Config) -> None:
        config.debug = True

    return apply


def apply_options(config: Config, options: Iterable[Option]) -> Config:
    """Apply options to a config in order and return it."""
    for option in options:
        option(config)
    return config


def _id_option(setter: Callable[[int], Option], name: str) -> Callable[[str], Option]:
    """Wrap a uid/gid setter so it accepts the string form of a mount option."""

    def build(value: str) -> Option:
        try:
            return setter(int(value))
        except ValueError:
            raise ConfigError(f"invalid {name}: {value!r}")

    return build


# Mount options that take a value (key=value)
VALUE_OPTIONS = {
    "cache": cache_dir,
    "uid": _id_option(set_uid, "uid"),
    "gid": _id_option(set_gid, "gid"),
}

# Mount options that are plain flags
FLAG_OPTIONS = {
    "insecure": insecure,
    "debug": debug,
}


def parse_mount_options(text: str) -> List[Option]:
    """Parse a comma separated mount option string such as ``uid=1000,insecure``.

    Args:
        text: Mount option string

    Returns:
        Options in the order they appear

    Raises:
        ConfigError: If an option is unknown or has a bad value
    """
    options = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue

        key, sep, value = item.partition("=")
        if key in FLAG_OPTIONS:
            if sep:
                raise ConfigError(f"mount option {key} takes no value")
            options.append(FLAG_OPTIONS[key]())
        elif key in VALUE_OPTIONS:
            if not value:
                raise ConfigError(f"mount option {key} requires a value")
            options.append(VALUE_OPTIONS[key](value))
        else:
            raise ConfigError(f"unknown mount option: {key}")

    return options
