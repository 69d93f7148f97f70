import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class Entry(NamedTuple):
    name: str
    is_dir: bool


class FilesystemPostsRepo:
    """
    Read-only access to a tree of markdown files.

    Paths handed in and out are POSIX-style and relative to the posts root.
    Every call hits the filesystem; nothing is cached.
    """

    def __init__(self, root):
        self.root = Path(root)

    def list_markdown_files(self) -> List[str]:
        files: List[str] = []
        self._walk(self.root, PurePosixPath(), files)
        return files

    def _walk(self, directory: Path, relative: PurePosixPath, files: List[str]) -> None:
        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.warning(f"Error reading directory {directory}: {e}")
            return

        for entry in entries:
            entry_relative = relative / entry.name
            if _is_dir(entry):
                self._walk(Path(entry.path), entry_relative, files)
            elif entry.name.endswith(MARKDOWN_SUFFIX):
                files.append(str(entry_relative))

    def list_entries(self, category: str = "") -> Optional[List[Entry]]:
        """
        Subdirectories and markdown files of a category, in listing order.
        Returns None when the category is not an existing directory.
        """
        directory = self._resolve(category)
        if directory is None or not directory.is_dir():
            return None

        try:
            scanned = list(os.scandir(directory))
        except OSError as e:
            logger.warning(f"Error reading directory {directory}: {e}")
            return []

        entries: List[Entry] = []
        for entry in scanned:
            if _is_dir(entry):
                entries.append(Entry(entry.name, True))
            elif entry.name.endswith(MARKDOWN_SUFFIX):
                entries.append(Entry(entry.name, False))
        return entries

    def is_category(self, category: str) -> bool:
        directory = self._resolve(category)
        return directory is not None and directory.is_dir()

    def read_file(self, relative_path: str) -> Optional[str]:
        path = self._resolve(relative_path)
        if path is None or not path.is_file():
            return None
        return read_markdown(path)

    def read_post(self, category: str, slug: str) -> Optional[str]:
        return self.read_file(post_file_path(category, slug))

    def _resolve(self, relative_path: str) -> Optional[Path]:
        parts = [p for p in PurePosixPath(relative_path or ".").parts if p not in ("", ".")]
        if any(p == ".." or p.startswith("/") for p in parts):
            return None
        return self.root.joinpath(*parts)


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def read_markdown(path: Path) -> str:
    # newline="" keeps \r\n intact
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def post_file_path(category: str, slug: str) -> str:
    name = f"{slug}{MARKDOWN_SUFFIX}"
    return f"{category}/{name}" if category else name


def split_post_path(relative_path: str) -> Tuple[str, str]:
    """Split ``a/b/slug.md`` into category ``a/b`` and slug ``slug``."""
    path = PurePosixPath(relative_path)
    category = str(path.parent) if str(path.parent) != "." else ""
    slug = path.name
    if slug.endswith(MARKDOWN_SUFFIX):
        slug = slug[: -len(MARKDOWN_SUFFIX)]
    return category, slug
