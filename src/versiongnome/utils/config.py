"""Config utility for persistent VersionGnome settings.

Reads and writes ~/.config/versiongnome/config.toml (respecting
XDG_CONFIG_HOME). Uses tomli/tomli-w for TOML parsing and writing.

Two kinds of settings live there:
- scalar defaults for the CLI (``resolve.multi_version``,
  ``resolve.media_type``...), looked up with :func:`resolve_setting`;
- a ``[naming]`` table overriding fields of
  :class:`~versiongnome.models.options.NamingOptions`, loaded with
  :func:`load_naming_options`.

The resolver core never reads configuration itself; callers pass options in.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import tomli
import tomli_w
from pydantic import ValidationError

from versiongnome.errors import ConfigError
from versiongnome.models.options import NamingOptions

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "versiongnome"
CONFIG_FILE = CONFIG_DIR / "config.toml"

T = TypeVar("T")

_TRUTHY = {"1", "true", "yes", "on"}


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with CONFIG_FILE.open("rb") as f:
            return tomli.load(f)
    except tomli.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {CONFIG_FILE}: {exc}") from exc


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="resolve.media_type" will attempt
    ``data["resolve"]["media_type"]`` returning None if any level is missing.
    """
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "VERSIONGNOME_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "resolve.multi_version" -> "VERSIONGNOME_RESOLVE_MULTI_VERSION".
    """
    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Best-effort conversion of an env/config *value* to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cast(T, float(value))
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(value))
        return default
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"resolve.multi_version"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from a CLI option (``None`` when not provided).

    Returns:
        The resolved value, coerced to the type of *default* when possible.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    current = data
    for part in parents:
        current = current.setdefault(part, {})
    current[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def load_naming_options(base: Optional[NamingOptions] = None) -> NamingOptions:
    """Overlay the ``[naming]`` table of config.toml on *base* (or the defaults).

    Lists in the file replace the corresponding defaults entirely.

    Raises:
        ConfigError: If the file is not valid TOML or the table does not
            validate (unknown regex syntax, wrong types...).
    """
    base = base or NamingOptions()
    table = _read_config_file().get("naming")
    if not table:
        return base
    if not isinstance(table, dict):
        raise ConfigError("[naming] must be a table")

    overrides: dict[str, Any] = {}
    for field_name, value in table.items():
        if field_name not in NamingOptions.model_fields:
            raise ConfigError(f"Unknown naming option: {field_name}")
        if isinstance(value, list):
            value = tuple(tuple(item) if isinstance(item, list) else item for item in value)
        overrides[field_name] = value

    try:
        return NamingOptions.model_validate({**base.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigError(f"Invalid [naming] options: {exc}") from exc
