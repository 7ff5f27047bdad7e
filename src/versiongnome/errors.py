"""Exception types raised by versiongnome.

Expected ineligibility (a folder that cannot be grouped, an episode without a
version tag) is never an error; these types cover caller mistakes only.
"""


class VersionGnomeError(Exception):
    """Base class for all versiongnome errors."""


class UnsupportedMediaKindError(VersionGnomeError, ValueError):
    """Raised when a media kind cannot be mapped to a known collection type."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unsupported media kind: {value!r}")


class ConfigError(VersionGnomeError):
    """Raised when the configuration file cannot be used."""
