"""Naming options and their compiled form.

NamingOptions holds the regex *sources*, extensions and extra rules that drive
name cleaning, year parsing, stacking and extra detection. It is a frozen,
hashable pydantic model so it can be loaded from configuration, compared, and
used as a cache key.

NamingPatterns is the precompiled counterpart. It is built once per options
object (see :func:`compile_patterns`) and shared by reference; nothing in it is
mutable.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from versiongnome.models.core import ExtraType

# Release tokens stripped from the end of names. The first group captures the
# title, everything from the first recognised token onwards is dropped.
DEFAULT_CLEAN_STRINGS: Tuple[str, ...] = (
    r"^\s*(?P<cleaned>.+?)[ _,.()\[\]\-](3d|sbs|tab|hsbs|htab|mvc|HDR|HDC|UHD"
    r"|UltraHD|4k|ac3|dts|custom|dc|divx|divx5|dsr|dsrip|dutch|dvd|dvdrip|dvdscr"
    r"|dvdscreener|screener|dvdivx|cam|fragment|fs|hdtv|hdrip|hdtvrip|internal"
    r"|limited|multi|subs|ntsc|ogg|ogm|pal|pdtv|proper|repack|rerip|retail"
    r"|cd[1-9]|r5|bd5|bd|se|svcd|swedish|german|read.nfo|nfofix|unrated|ws"
    r"|telesync|ts|telecine|tc|brrip|bdrip|480p|480i|576p|576i|720p|720i|1080p"
    r"|1080i|2160p|hrhd|hrhdtv|hddvd|bluray|blu-ray|x264|x265|h264|h265|xvid"
    r"|xvidvd|xxx|www.www|AAC|DTS|\[.*\])([ _,.()\[\]\-]|$)",
    r"^(?P<cleaned>.+?)(\[.*\])",
    r"^\s*(?P<cleaned>.+?)\WWEBDL(?:[ _.]|$)",
    r"^\s*\[[^\]]+\](?!\.\w+$)\s*(?P<cleaned>.+)",
)

# Title followed by a 19xx/20xx year. Groups: title, year, separator, trailing year.
DEFAULT_CLEAN_DATETIMES: Tuple[str, ...] = (
    r"(.+[^_,.()\[\]\-])[_.()\[\]\-](19[0-9]{2}|20[0-9]{2})"
    r"(?![0-9]+|\W[0-9]{2}\W[0-9]{2})([ _,.()\[\]\-][^0-9]|).*(19[0-9]{2}|20[0-9]{2})*",
    r"(.+[^_,.()\[\]\-])[ _.()\[\]\-]+(19[0-9]{2}|20[0-9]{2})"
    r"(?![0-9]+|\W[0-9]{2}\W[0-9]{2})([ _,.()\[\]\-][^0-9]|).*(19[0-9]{2}|20[0-9]{2})*",
)

# (pattern, numeric part numbers)
DEFAULT_STACKING_RULES: Tuple[Tuple[str, bool], ...] = (
    (
        r"^(?P<filename>.*?)(?:(?<=[\])}])|[ _.-]+)[(\[]?(?P<parttype>cd|dvd|part|pt|dis[ck])"
        r"[ _.-]*(?P<number>[0-9]+)[)\]]?(?:\.[^.]+)?$",
        True,
    ),
    (
        r"^(?P<filename>.*?)(?:(?<=[\])}])|[ _.-]+)[(\[]?(?P<parttype>cd|dvd|part|pt|dis[ck])"
        r"[ _.-]*(?P<number>[a-d])[)\]]?(?:\.[^.]+)?$",
        False,
    ),
)

DEFAULT_VIDEO_EXTENSIONS: Tuple[str, ...] = (
    ".3g2",
    ".3gp",
    ".asf",
    ".avi",
    ".divx",
    ".dvr-ms",
    ".f4v",
    ".flv",
    ".img",
    ".iso",
    ".m2t",
    ".m2ts",
    ".m2v",
    ".m4v",
    ".mk3d",
    ".mkv",
    ".mov",
    ".mp4",
    ".mpeg",
    ".mpg",
    ".mts",
    ".ogg",
    ".ogm",
    ".ogv",
    ".rec",
    ".rmvb",
    ".strm",
    ".ts",
    ".vob",
    ".webm",
    ".wmv",
    ".wtv",
)


class ExtraRuleType(str, Enum):
    """How an extra rule token is compared against a path."""

    FILENAME = "filename"
    SUFFIX = "suffix"
    DIRECTORY_NAME = "directoryname"


class ExtraRule(BaseModel):
    """Maps a path token to an extra type."""

    model_config = ConfigDict(frozen=True)

    extra_type: ExtraType
    rule_type: ExtraRuleType
    token: str


def _rule(extra_type: ExtraType, rule_type: ExtraRuleType, token: str) -> ExtraRule:
    return ExtraRule(extra_type=extra_type, rule_type=rule_type, token=token)


DEFAULT_EXTRA_RULES: Tuple[ExtraRule, ...] = (
    _rule(ExtraType.TRAILER, ExtraRuleType.DIRECTORY_NAME, "trailers"),
    _rule(ExtraType.THEME_VIDEO, ExtraRuleType.DIRECTORY_NAME, "backdrops"),
    _rule(ExtraType.BEHIND_THE_SCENES, ExtraRuleType.DIRECTORY_NAME, "behind the scenes"),
    _rule(ExtraType.DELETED_SCENE, ExtraRuleType.DIRECTORY_NAME, "deleted scenes"),
    _rule(ExtraType.INTERVIEW, ExtraRuleType.DIRECTORY_NAME, "interviews"),
    _rule(ExtraType.SCENE, ExtraRuleType.DIRECTORY_NAME, "scenes"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.DIRECTORY_NAME, "samples"),
    _rule(ExtraType.SHORT, ExtraRuleType.DIRECTORY_NAME, "shorts"),
    _rule(ExtraType.FEATURETTE, ExtraRuleType.DIRECTORY_NAME, "featurettes"),
    _rule(ExtraType.CLIP, ExtraRuleType.DIRECTORY_NAME, "clips"),
    _rule(ExtraType.UNKNOWN, ExtraRuleType.DIRECTORY_NAME, "extras"),
    _rule(ExtraType.UNKNOWN, ExtraRuleType.DIRECTORY_NAME, "other"),
    _rule(ExtraType.TRAILER, ExtraRuleType.FILENAME, "trailer"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.FILENAME, "sample"),
    _rule(ExtraType.TRAILER, ExtraRuleType.SUFFIX, "-trailer"),
    _rule(ExtraType.TRAILER, ExtraRuleType.SUFFIX, ".trailer"),
    _rule(ExtraType.TRAILER, ExtraRuleType.SUFFIX, "_trailer"),
    _rule(ExtraType.TRAILER, ExtraRuleType.SUFFIX, " trailer"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.SUFFIX, "-sample"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.SUFFIX, ".sample"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.SUFFIX, "_sample"),
    _rule(ExtraType.SAMPLE, ExtraRuleType.SUFFIX, " sample"),
    _rule(ExtraType.SCENE, ExtraRuleType.SUFFIX, "-scene"),
    _rule(ExtraType.CLIP, ExtraRuleType.SUFFIX, "-clip"),
    _rule(ExtraType.INTERVIEW, ExtraRuleType.SUFFIX, "-interview"),
    _rule(ExtraType.BEHIND_THE_SCENES, ExtraRuleType.SUFFIX, "-behindthescenes"),
    _rule(ExtraType.DELETED_SCENE, ExtraRuleType.SUFFIX, "-deleted"),
    _rule(ExtraType.DELETED_SCENE, ExtraRuleType.SUFFIX, "-deletedscene"),
    _rule(ExtraType.FEATURETTE, ExtraRuleType.SUFFIX, "-featurette"),
    _rule(ExtraType.SHORT, ExtraRuleType.SUFFIX, "-short"),
    _rule(ExtraType.UNKNOWN, ExtraRuleType.SUFFIX, "-extra"),
    _rule(ExtraType.UNKNOWN, ExtraRuleType.SUFFIX, "-other"),
)


class NamingOptions(BaseModel):
    """Regex sources and lookup tables used by the naming collaborators.

    All collections are tuples so the model stays hashable.
    """

    model_config = ConfigDict(frozen=True)

    clean_strings: Tuple[str, ...] = DEFAULT_CLEAN_STRINGS
    """Patterns with a ``cleaned`` group; the first match wins."""

    clean_datetimes: Tuple[str, ...] = DEFAULT_CLEAN_DATETIMES
    """Patterns capturing a title and a year."""

    stacking_rules: Tuple[Tuple[str, bool], ...] = DEFAULT_STACKING_RULES
    """Multi-part patterns paired with whether their part numbers are numeric."""

    video_extensions: Tuple[str, ...] = DEFAULT_VIDEO_EXTENSIONS
    """Extensions (with dot) treated as video files."""

    extra_rules: Tuple[ExtraRule, ...] = DEFAULT_EXTRA_RULES
    """Rules mapping path tokens to extra types, checked in order."""

    @field_validator("clean_strings", "clean_datetimes")
    @classmethod
    def _check_regexes(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for source in value:
            try:
                re.compile(source)
            except re.error as exc:
                raise ValueError(f"Invalid regex {source!r}: {exc}") from exc
        return value

    @field_validator("video_extensions")
    @classmethod
    def _normalise_extensions(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value
        )

    def compile(self) -> "NamingPatterns":
        """Return the (cached) compiled patterns for these options."""
        return compile_patterns(self)


@dataclass(frozen=True)
class StackRule:
    """A compiled multi-part pattern."""

    pattern: Pattern[str]
    is_numerical: bool


@dataclass(frozen=True)
class NamingPatterns:
    """Precompiled, immutable patterns derived from a NamingOptions object."""

    options: NamingOptions
    clean_strings: Tuple[Pattern[str], ...]
    clean_datetimes: Tuple[Pattern[str], ...]
    stacking_rules: Tuple[StackRule, ...]

    def is_video_file(self, path: str) -> bool:
        """Check whether *path* has one of the configured video extensions."""
        dot = path.rfind(".")
        if dot == -1:
            return False
        return path[dot:].lower() in self.options.video_extensions


def compile_patterns(options: Optional[NamingOptions] = None) -> NamingPatterns:
    """Compile *options* (or the defaults) once and reuse the result.

    Args:
        options: Options to compile; ``None`` means the built-in defaults.

    Returns:
        The NamingPatterns for the options.
    """
    return _compile(options or NamingOptions())


@lru_cache(maxsize=16)
def _compile(options: NamingOptions) -> NamingPatterns:
    return NamingPatterns(
        options=options,
        clean_strings=tuple(
            re.compile(source, re.IGNORECASE) for source in options.clean_strings
        ),
        clean_datetimes=tuple(re.compile(source) for source in options.clean_datetimes),
        stacking_rules=tuple(
            StackRule(re.compile(source, re.IGNORECASE), numerical)
            for source, numerical in options.stacking_rules
        ),
    )
