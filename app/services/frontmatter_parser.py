import logging
import re
from typing import Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

logger = logging.getLogger(__name__)

DELIMITER = "---"
MAX_FRONTMATTER_LINES = 60

_LINE_START = re.compile(r"(?<=\n)")
_LINE_END = re.compile(r"\r?\n$")
_HEADING = re.compile(r"^#{1,6}\s+")

_yaml_handler = YAMLHandler()


class FrontmatterError(ValueError):
    """Base class for malformed or missing frontmatter blocks."""

    message = "invalid frontmatter"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class EmptyFileError(FrontmatterError):
    message = "file is empty"


class MissingOpeningDelimiterError(FrontmatterError):
    message = "frontmatter must start at the first line with '---'"


class UnclosedFrontmatterError(FrontmatterError):
    message = "frontmatter must be closed with '---' before the markdown body starts"


class FrontmatterSyntaxError(FrontmatterError):
    message = "frontmatter parse error"


def split_frontmatter(raw: str) -> Tuple[str, str]:
    """
    Split a markdown document into its raw frontmatter block and body.

    The block runs from the first non-blank line (which must be ``---``) to
    the next ``---`` line. Scanning gives up on a markdown heading or after
    MAX_FRONTMATTER_LINES lines, so separators inside the body are never
    taken as the closing delimiter.
    """
    # Each piece keeps its own line ending so the body can be sliced verbatim
    pieces = _LINE_START.split(raw)
    lines = [_LINE_END.sub("", piece) for piece in pieces]

    start = next((i for i, line in enumerate(lines) if line.strip()), None)
    if start is None:
        raise EmptyFileError()

    if lines[start].strip() != DELIMITER:
        raise MissingOpeningDelimiterError()

    end = None
    for i in range(start + 1, len(lines)):
        if _HEADING.match(lines[i]):
            break
        if i - start > MAX_FRONTMATTER_LINES:
            break
        if lines[i].strip() == DELIMITER:
            end = i
            break

    if end is None:
        raise UnclosedFrontmatterError()

    frontmatter_raw = "\n".join(lines[start + 1 : end])
    body = "".join(pieces[end + 1 :])
    return frontmatter_raw, body


def load_metadata(frontmatter_raw: str) -> dict:
    """Parse a frontmatter block as a flat YAML mapping."""
    try:
        data = _yaml_handler.load(frontmatter_raw)
    except yaml.YAMLError as e:
        raise FrontmatterSyntaxError(f"frontmatter parse error: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterSyntaxError(
            f"frontmatter parse error: expected a mapping, got {type(data).__name__}"
        )
    return data


def parse_frontmatter(raw: str) -> Tuple[dict, str]:
    frontmatter_raw, body = split_frontmatter(raw)
    return load_metadata(frontmatter_raw), body


def join_frontmatter(frontmatter_raw: str, body: str) -> str:
    """Rebuild a document with canonical delimiters."""
    return f"{DELIMITER}\n{frontmatter_raw}\n{DELIMITER}\n{body}"
