"""
Offline content checks for the posts directory.

Unlike the serving path, which skips malformed files, this reports every
problem of every file and fails the run when any file has errors.
"""

import datetime
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from app.repos.posts_repo import FilesystemPostsRepo, read_markdown
from app.services.frontmatter_parser import (
    FrontmatterError,
    FrontmatterSyntaxError,
    load_metadata,
    split_frontmatter,
)
from app.settings import settings

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SEPARATOR_LINE = re.compile(r"^-{3,}\s*$")

TITLE_REQUIRED = "frontmatter.title is required (non-empty string)"
SUMMARY_REQUIRED = "frontmatter.summary is required (non-empty string)"
DATE_REQUIRED = 'frontmatter.date is required (format: "YYYY-MM-DD")'
TAGS_INVALID = "frontmatter.tags must be a string[] (or string)"
BODY_EMPTY = "markdown body is empty"
BODY_SEPARATOR = "body starts with a separator line; remove it and start with '##'"
BODY_H1 = "do not use H1 ('# ...'); start sections with '##'"
BODY_H2_REQUIRED = "body should start with a '## ' heading"
UNREADABLE = "cannot read file"


@dataclass
class FileReport:
    path: Path
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_text(raw: str) -> List[str]:
    """Return every error found in one markdown document."""
    try:
        frontmatter_raw, body = split_frontmatter(raw)
    except FrontmatterError as e:
        # Structural problems stop the remaining checks
        return [str(e)]

    try:
        metadata = load_metadata(frontmatter_raw)
    except FrontmatterSyntaxError as e:
        return [str(e)]

    errors = []
    if not _is_non_empty_string(metadata.get("title")):
        errors.append(TITLE_REQUIRED)
    if not _is_non_empty_string(metadata.get("summary")):
        errors.append(SUMMARY_REQUIRED)
    if not _is_valid_date(metadata.get("date")):
        errors.append(DATE_REQUIRED)
    if not _has_valid_tags(metadata):
        errors.append(TAGS_INVALID)

    errors.extend(_check_body(body))
    return errors


def _check_body(body: str) -> List[str]:
    first_line = _first_non_blank_line(body)
    if first_line is None:
        return [BODY_EMPTY]

    stripped = first_line.strip()
    if SEPARATOR_LINE.match(first_line):
        return [BODY_SEPARATOR, BODY_H2_REQUIRED]
    if stripped.startswith("# "):
        return [BODY_H1]
    if not stripped.startswith("## "):
        return [BODY_H2_REQUIRED]
    return []


def _first_non_blank_line(text: str) -> Optional[str]:
    return next((line for line in text.splitlines() if line.strip()), None)


def _is_non_empty_string(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_valid_date(value) -> bool:
    # PyYAML turns unquoted dates into date objects
    if isinstance(value, datetime.datetime):
        return False
    if isinstance(value, datetime.date):
        return True
    return _is_non_empty_string(value) and bool(DATE_PATTERN.match(value.strip()))


def _has_valid_tags(metadata: dict) -> bool:
    tags = metadata.get("tags")
    if tags is None:
        return True
    if isinstance(tags, str):
        return True
    if isinstance(tags, list):
        return all(isinstance(tag, str) for tag in tags)
    return False


def validate_file(path: Path) -> FileReport:
    path = Path(path)
    try:
        raw = read_markdown(path)
    except (OSError, UnicodeDecodeError) as e:
        return FileReport(path=path, errors=[f"{UNREADABLE}: {e}"])
    return FileReport(path=path, errors=validate_text(raw))


def validate_directory(root) -> List[FileReport]:
    """Validate every markdown file under root; only failing files are returned."""
    root = Path(root)
    repo = FilesystemPostsRepo(root)
    failures = []
    for relative_path in repo.list_markdown_files():
        report = validate_file(root / relative_path)
        if not report.ok:
            failures.append(report)
    return failures


def format_report(failures: List[FileReport], base: Optional[Path] = None) -> str:
    lines = [f"[validate:posts] Found {len(failures)} invalid post(s)."]
    for failure in failures:
        shown = failure.path
        if base is not None:
            try:
                shown = failure.path.relative_to(base)
            except ValueError:
                pass
        lines.append("")
        lines.append(f"- {shown}")
        lines.extend(f"  - {message}" for message in failure.errors)
    return "\n".join(lines)


def main(root: Optional[Path] = None) -> int:
    root = Path(root) if root is not None else settings.posts_path
    try:
        if not root.is_dir():
            raise FileNotFoundError(f"Posts directory not found: {root}")
        total = len(FilesystemPostsRepo(root).list_markdown_files())
        failures = validate_directory(root)
    except Exception as e:
        logger.error(f"[validate:posts] Unexpected error: {e}", exc_info=True)
        return 1

    if failures:
        print(format_report(failures, base=Path.cwd()), file=sys.stderr)
        return 1

    print(f"[validate:posts] OK ({total} post(s))")
    return 0


def cli() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
