r"""Extract documentation comments and their front matter from source text.

A documentation comment is either a ``/*doc ... */`` block or a run of ``//``
line comments opened by ``//doc``. Its body starts with YAML front matter
between ``---`` fences followed by markdown.

Example
-------
>>> from styleguide_pages.parser.comments import extract_comments
>>> source = "/*doc\n---\nname: button\ntitle: Button\n---\nA *button*.\n*/"
>>> comment = extract_comments(source)[0]
>>> comment.front_matter["name"], comment.markdown
('button', 'A *button*.')
"""

from __future__ import annotations

import dataclasses as dc
import re
import textwrap
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from styleguide_pages.errors import ParserError

BLOCK_COMMENT_PATTERN = re.compile(r"/\*doc[ \t]*\n(.*?)\*/", re.DOTALL)
LINE_COMMENT_PATTERN = re.compile(
    r"^[ \t]*//doc[ \t]*\n((?:[ \t]*//.*(?:\n|$))*)", re.MULTILINE
)
LINE_PREFIX_PATTERN = re.compile(r"^[ \t]*// ?", re.MULTILINE)
FRONT_MATTER_PATTERN = re.compile(r"\A\s*---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)(.*)", re.DOTALL)


@dc.dataclass(slots=True)
class DocComment:
    """One documentation comment split into front matter and markdown.

    Attributes
    ----------
    front_matter : dict[str, Any]
        Parsed YAML mapping; empty when the comment has none.
    markdown : str
        Markdown following the front matter, dedented and stripped.
    line : int
        1-based line on which the comment starts.
    """

    front_matter: dict[str, typ.Any]
    markdown: str
    line: int


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _split_front_matter(body: str, line: int) -> DocComment:
    match = FRONT_MATTER_PATTERN.match(body)
    if not match:
        return DocComment(front_matter={}, markdown=body.strip(), line=line)
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1))
    except YAMLError as exc:
        msg = f"Could not parse YAML front matter on line {line}: {exc}"
        raise ParserError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Front matter on line {line} must be a mapping."
        raise ParserError(msg)
    return DocComment(
        front_matter=dict(loaded),
        markdown=textwrap.dedent(match.group(2)).strip(),
        line=line,
    )


def extract_comments(text: str) -> list[DocComment]:
    """Return every documentation comment in ``text`` in source order.

    Raises
    ------
    ParserError
        If a comment's front matter is not valid YAML or not a mapping.
    """
    found: list[tuple[int, str]] = []
    for match in BLOCK_COMMENT_PATTERN.finditer(text):
        found.append((match.start(), textwrap.dedent(match.group(1))))
    for match in LINE_COMMENT_PATTERN.finditer(text):
        body = LINE_PREFIX_PATTERN.sub("", match.group(1))
        found.append((match.start(), body))
    found.sort(key=lambda item: item[0])
    return [_split_front_matter(body, _line_of(text, start)) for start, body in found]


__all__ = ["DocComment", "extract_comments"]
