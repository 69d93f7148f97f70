import datetime
import logging
from typing import List, Optional

from app.repos.posts_repo import post_file_path, split_post_path
from app.schemas.blog import PostDetail, PostPath, PostSummary
from app.services.frontmatter_parser import FrontmatterError, parse_frontmatter

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    pass


class PostNotFoundError(NotFoundError):
    def __init__(self, category: str, slug: str):
        super().__init__(f"Post not found: {post_file_path(category, slug)}")
        self.category = category
        self.slug = slug


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category: str):
        super().__init__(f"Category not found: {category}")
        self.category = category


class PostsService:
    def __init__(self, repo):
        self.repo = repo

    def list_posts(self) -> List[PostSummary]:
        posts = []
        for relative_path in self.repo.list_markdown_files():
            post = self._load_summary(relative_path)
            if post:
                posts.append(post)
        return sort_by_date(posts)

    def list_posts_by_category(self, category: str) -> List[PostSummary]:
        category = category.strip("/")
        return [post for post in self.list_posts() if post.category == category]

    def get_post(self, category: str, slug: str) -> PostDetail:
        category = category.strip("/")
        raw = self.repo.read_post(category, slug)
        if raw is None:
            raise PostNotFoundError(category, slug)
        metadata, body = parse_frontmatter(raw)
        return PostDetail(
            **build_post_data(metadata, category, slug), body=body
        )

    def post_exists(self, category: str, slug: str) -> bool:
        return self.repo.read_post(category.strip("/"), slug) is not None

    def list_post_paths(self) -> List[PostPath]:
        paths = []
        for relative_path in self.repo.list_markdown_files():
            category, slug = split_post_path(relative_path)
            paths.append(PostPath(category=category, slug=slug))
        return paths

    def list_category_paths(self) -> List[str]:
        paths: List[str] = []
        self._collect_category_paths("", paths)
        return paths

    def _collect_category_paths(self, category: str, paths: List[str]) -> None:
        for entry in self.repo.list_entries(category) or []:
            if not entry.is_dir:
                continue
            child = f"{category}/{entry.name}" if category else entry.name
            paths.append(child)
            self._collect_category_paths(child, paths)

    def _load_summary(self, relative_path: str) -> Optional[PostSummary]:
        category, slug = split_post_path(relative_path)
        return load_post_summary(self.repo, category, slug)


def load_post_summary(repo, category: str, slug: str) -> Optional[PostSummary]:
    """Read and parse one post for listings; unreadable or malformed files are skipped."""
    relative_path = post_file_path(category, slug)
    try:
        raw = repo.read_file(relative_path)
        if raw is None:
            logger.warning(f"Post file disappeared while listing: {relative_path}")
            return None
        metadata, _body = parse_frontmatter(raw)
        return PostSummary(**build_post_data(metadata, category, slug))
    except FrontmatterError as e:
        logger.warning(f"Skipping post {relative_path}: {e}")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error processing file {relative_path}: {e}")
        return None


def build_post_data(metadata: dict, category: str, slug: str) -> dict:
    """Standardize frontmatter into post fields, applying defaults."""
    return {
        "title": _derive_title(metadata, slug),
        "date": _convert_date(metadata.get("date")) or _today(),
        "category": category,
        "slug": slug,
        "fullPath": post_file_path(category, slug),
        "summary": _optional_text(metadata.get("summary")),
        "tags": normalize_tags(metadata.get("tags")),
    }


def sort_by_date(posts: List[PostSummary]) -> List[PostSummary]:
    # sorted() is stable with reverse=True, equal dates keep discovery order
    return sorted(posts, key=lambda p: p.date, reverse=True)


def normalize_tags(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [tag for tag in value if isinstance(tag, str)]
    return []


def _derive_title(metadata: dict, slug: str) -> str:
    title = metadata.get("title")
    if title is None or not str(title).strip():
        return slug
    return str(title)


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _convert_date(value) -> Optional[str]:
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if value is None:
        return None
    return str(value).strip() or None


def _today() -> str:
    return datetime.date.today().isoformat()
