import logging
import math
from pathlib import PurePosixPath
from typing import List

from app.repos.posts_repo import MARKDOWN_SUFFIX
from app.schemas.blog import CategoryInfo, CategoryNode, CategoryPage
from app.services.posts_service import (
    CategoryNotFoundError,
    load_post_summary,
    sort_by_date,
)
from app.settings import settings
from app.utils import paginate

logger = logging.getLogger(__name__)


class CategoryService:
    """Navigation structures derived from the posts directory layout."""

    def __init__(self, repo, url_prefix: str | None = None):
        self.repo = repo
        self.url_prefix = (url_prefix or settings.POST_URL_PREFIX).rstrip("/")

    def build_category_tree(self, category: str = "") -> List[CategoryNode]:
        """
        Mirror the directory tree one node per entry, in listing order.
        Unreadable or missing directories produce no children.
        """
        entries = self.repo.list_entries(category)
        if entries is None:
            logger.warning(f"Category directory missing while building tree: {category!r}")
            return []

        nodes: List[CategoryNode] = []
        for entry in entries:
            if entry.is_dir:
                child = _join(category, entry.name)
                nodes.append(
                    CategoryNode(
                        name=entry.name,
                        path=self._url(child),
                        isDirectory=True,
                        children=self.build_category_tree(child),
                    )
                )
            else:
                name = _strip_suffix(entry.name)
                nodes.append(
                    CategoryNode(
                        name=name,
                        path=self._url(_join(category, name)),
                        isDirectory=False,
                        isPost=True,
                    )
                )
        return nodes

    def get_category_info(self, category_path: str) -> CategoryInfo:
        category = category_path.strip("/")
        entries = self.repo.list_entries(category)
        if entries is None:
            raise CategoryNotFoundError(category)

        posts = []
        subcategories = []
        for entry in entries:
            if entry.is_dir:
                subcategories.append(self.get_category_info(_join(category, entry.name)))
                continue
            post = load_post_summary(self.repo, category, _strip_suffix(entry.name))
            if post:
                posts.append(post)

        return CategoryInfo(
            name=PurePosixPath(category).name,
            path=self._url(category),
            posts=sort_by_date(posts),
            subcategories=subcategories,
        )

    def get_category_page(
        self, category_path: str, page: int = 1, per_page: int | None = None
    ) -> CategoryPage:
        info = self.get_category_info(category_path)
        per_page = per_page or settings.POSTS_PER_PAGE
        current, items = paginate(info.posts, page, per_page)
        return CategoryPage(
            name=info.name,
            path=info.path,
            posts=items,
            subcategories=info.subcategories,
            page=current,
            perPage=per_page,
            totalPages=math.ceil(len(info.posts) / per_page),
            totalPosts=len(info.posts),
        )

    def is_category(self, category_path: str) -> bool:
        return self.repo.is_category(category_path.strip("/"))

    def list_top_level_categories(self) -> List[str]:
        return [entry.name for entry in self.repo.list_entries("") or [] if entry.is_dir]

    def _url(self, relative: str) -> str:
        return f"{self.url_prefix}/{relative}" if relative else self.url_prefix


def _join(category: str, name: str) -> str:
    return f"{category}/{name}" if category else name


def _strip_suffix(filename: str) -> str:
    return filename[: -len(MARKDOWN_SUFFIX)]
