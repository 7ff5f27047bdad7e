"""Detection of multi-part titles ("stacks").

A stack is a set of files or directories named like ``Movie cd1``/``Movie cd2``
or ``Movie - part a``/``Movie - part b``. Parts are bucketed by the title
prefix captured by the stacking rules; a bucket with at least two parts is a
stack.
"""

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, Iterable, List, Optional, Tuple

from versiongnome.models.core import FileStack
from versiongnome.models.options import NamingPatterns, StackRule, compile_patterns

logger = logging.getLogger(__name__)


@dataclass
class _StackCandidate:
    is_directory: bool
    is_numerical: bool
    part_type: str
    parts: Dict[str, str] = field(default_factory=dict)


def _match_rule(rule: StackRule, name: str) -> Optional[Tuple[str, str, str]]:
    match = rule.pattern.match(name)
    if match is None:
        return None
    return match.group("filename"), match.group("parttype"), match.group("number").casefold()


def resolve_stacks(
    files: Iterable[Tuple[str, bool]],
    patterns: Optional[NamingPatterns] = None,
) -> List[FileStack]:
    """Find stacks among *files*.

    Args:
        files: ``(path, is_directory)`` pairs.
        patterns: Compiled naming patterns; defaults are used when omitted.

    Returns:
        Stacks in order of the first part's path.
    """
    patterns = patterns or compile_patterns()
    candidates = sorted(
        (
            (path, is_directory)
            for path, is_directory in files
            if is_directory or patterns.is_video_file(path)
        ),
        key=lambda item: item[0],
    )

    potential: Dict[str, _StackCandidate] = {}
    for path, is_directory in candidates:
        name = PurePath(path).name
        for rule in patterns.stacking_rules:
            parsed = _match_rule(rule, name)
            if parsed is None:
                continue

            stack_name, part_type, part_number = parsed
            stack = potential.get(stack_name)
            if stack is None:
                stack = _StackCandidate(is_directory, rule.is_numerical, part_type)
                potential[stack_name] = stack

            if stack.parts:
                if (
                    stack.is_directory != is_directory
                    or stack.part_type.casefold() != part_type.casefold()
                    or part_number in stack.parts
                ):
                    continue
                if rule.is_numerical != stack.is_numerical:
                    break

            stack.parts[part_number] = path
            break

    stacks = [
        FileStack(
            name=stack_name,
            files=list(stack.parts.values()),
            is_directory_stack=stack.is_directory,
        )
        for stack_name, stack in potential.items()
        if len(stack.parts) >= 2
    ]
    for stack in stacks:
        logger.debug("Detected stack %r with %d parts", stack.name, len(stack.files))
    return stacks
