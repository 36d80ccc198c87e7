"""Extract relative links from markdown documents."""

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from skillshelf.utils.def_loader import split_lines

# [text](target "title") and ![alt](target)
INLINE_LINK_RE = re.compile(r"!?\[(?:[^\[\]]|\[[^\]]*\])*\]\(\s*(<[^>]*>|[^)\s]+)(?:\s+[^)]*)?\)")
# [id]: target "title"
REFERENCE_DEF_RE = re.compile(r"^\s{0,3}\[[^\]]+\]:\s*(<[^>]*>|\S+)")
INLINE_CODE_RE = re.compile(r"(`+)(?:.+?)\1")
FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})(.*)$")
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


@dataclass(frozen=True)
class Link:
    """A link target as written, and the line it appears on."""

    target: str
    line: int


def extract_links(text: str, first_line: int = 1) -> list[Link]:
    """
    Find inline and reference-style link targets outside code.

    Args:
        text: Markdown source
        first_line: Line number of the first line of text in its file

    Returns:
        Links in document order
    """
    links = []
    fence: str | None = None

    for offset, raw_line in enumerate(split_lines(text)):
        fence_match = FENCE_RE.match(raw_line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
                continue
            # a closing fence carries no info string
            closes = not fence_match.group(2).strip()
            if closes and marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
                continue
        if fence is not None:
            continue

        line = INLINE_CODE_RE.sub("", raw_line)
        line_no = first_line + offset

        ref = REFERENCE_DEF_RE.match(line)
        if ref:
            links.append(Link(_unwrap(ref.group(1)), line_no))
            continue

        for match in INLINE_LINK_RE.finditer(line):
            links.append(Link(_unwrap(match.group(1)), line_no))

    return links


def _unwrap(target: str) -> str:
    if target.startswith("<") and target.endswith(">"):
        return target[1:-1].strip()
    return target


def is_external(target: str) -> bool:
    """URLs, mailto: and protocol-relative links are not checked."""
    return bool(SCHEME_RE.match(target)) or target.startswith("//")


def local_path(target: str) -> str | None:
    """
    The filesystem part of a relative link target.

    Returns:
        Decoded path with any #fragment or ?query removed, or None for
        external links and pure anchors.
    """
    if is_external(target):
        return None
    path = re.split(r"[#?]", target, maxsplit=1)[0]
    if not path:
        return None
    return unquote(path)


def resolve_link(target: str, source: Path, root: Path) -> Path | None:
    """
    Resolve a link target written in `source` to a filesystem path.

    Root-relative targets ("/skills/x/SKILL.md") resolve against `root`.
    Returns None when the target is not a local link.
    """
    path = local_path(target)
    if path is None:
        return None
    if path.startswith("/"):
        return (root / path.lstrip("/")).resolve()
    return (source.parent / path).resolve()
