"""Shared utilities for loading definition files (SKILL.md and friends)."""

import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

T = TypeVar("T")
logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
BOM = "\ufeff"


class DefNotFoundError(Exception):
    """Definition folder or file doesn't exist."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(Exception):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: str):
        super().__init__(f"Invalid {kind} '{def_id}': {reason}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason


class InvalidFrontmatterError(ValueError):
    """Frontmatter block exists but is not a YAML mapping."""

    def __init__(self, reason: str, line: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.line = line


def split_lines(text: str, keepends: bool = False) -> list[str]:
    """
    Split text on newlines only.

    Form feeds, vertical tabs and unicode separators stay inside their
    line, and "\\r\\n" is a single line ending. A trailing newline does not
    start another line.
    """
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    if keepends:
        return lines
    return [line.removesuffix("\n").removesuffix("\r") for line in lines]


def count_lines(text: str) -> int:
    """Count lines the way an editor would; a trailing newline adds nothing."""
    return len(split_lines(text))


def strip_bom(content: str) -> str:
    """Drop the byte order mark some Windows editors write."""
    return content.removeprefix(BOM)


def _closing_delimiter(lines: list[str]) -> int | None:
    """Index of the line closing the frontmatter block, if there is one."""
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return None

    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONTMATTER_DELIMITER:
            return index
    return None


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """
    Split raw content into frontmatter text and body.

    Returns:
        (frontmatter_text, body). frontmatter_text is None when the file
        does not open with a delimited block.
    """
    lines = split_lines(strip_bom(content), keepends=True)
    index = _closing_delimiter(lines)
    if index is None:
        return None, content

    return "".join(lines[1:index]), "".join(lines[index + 1 :])


def body_start_line(content: str) -> int:
    """1-based line number where the markdown body starts."""
    index = _closing_delimiter(split_lines(strip_bom(content), keepends=True))
    return 1 if index is None else index + 2


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Parse YAML frontmatter from markdown content.

    Args:
        content: Full file content

    Returns:
        Tuple of (frontmatter dict, body). The dict is empty when there is
        no frontmatter block.

    Raises:
        InvalidFrontmatterError: If the block is not valid YAML or not a mapping
    """
    frontmatter_text, body = split_frontmatter(content)
    if frontmatter_text is None:
        return {}, content

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +2: opening delimiter, and yaml marks are 0-based
            line = mark.line + 2
        raise InvalidFrontmatterError(f"invalid YAML: {e}", line) from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise InvalidFrontmatterError(
            f"frontmatter must be a mapping, got {type(data).__name__}", 2
        )
    return data, body


def parse_definition(
    content: str,
    def_id: str,
    parse_fn: Callable[[str, dict[str, Any], str], T],
) -> T:
    """
    Parse YAML frontmatter + markdown body and hand both to parse_fn.

    Args:
        content: Raw file content
        def_id: Definition ID (directory name)
        parse_fn: Callback(def_id, frontmatter, body) -> result
    """
    frontmatter, body = parse_frontmatter(content)
    return parse_fn(def_id, frontmatter, body)


def discover_definitions(
    path: Path,
    filename: str,
    parse_fn: Callable[[str, dict[str, Any], str], T | None],
) -> list[T]:
    """
    Scan directory for definition files.

    Args:
        path: Directory containing definition folders
        filename: File to look for (e.g., "SKILL.md")
        parse_fn: Callback(def_id, frontmatter, body) -> Metadata or None

    Returns:
        List of parsed objects, in directory-name order
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    results = []
    for def_dir in sorted(path.iterdir()):
        if not def_dir.is_dir() or def_dir.name.startswith("."):
            continue

        def_file = def_dir / filename
        if not def_file.exists():
            logger.warning(f"No {filename} found in {def_dir.name}")
            continue

        try:
            content = def_file.read_text(encoding="utf-8")
            result = parse_definition(content, def_dir.name, parse_fn)
        except (OSError, UnicodeDecodeError, InvalidFrontmatterError) as e:
            logger.warning(f"Failed to parse {def_dir.name}: {e}")
            continue

        if result is not None:
            results.append(result)

    logger.debug(f"Discovered {len(results)} definition(s) in {path}")
    return results
