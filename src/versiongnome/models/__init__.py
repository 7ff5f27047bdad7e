"""Domain models for the versiongnome application."""

from versiongnome.models.core import (
    CollectionType,
    ExtraType,
    FileRecord,
    FileStack,
    LogicalEntry,
)
from versiongnome.models.options import (
    ExtraRule,
    ExtraRuleType,
    NamingOptions,
    NamingPatterns,
    compile_patterns,
)

__all__ = [
    "CollectionType",
    "ExtraRule",
    "ExtraRuleType",
    "ExtraType",
    "FileRecord",
    "FileStack",
    "LogicalEntry",
    "NamingOptions",
    "NamingPatterns",
    "compile_patterns",
]
