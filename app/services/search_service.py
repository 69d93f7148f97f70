import logging
from typing import List

from app.schemas.blog import MatchedFields, SearchResult
from app.services.frontmatter_parser import FrontmatterError
from app.services.posts_service import NotFoundError

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 10
SUMMARY_WEIGHT = 5
TAGS_WEIGHT = 3
CONTENT_WEIGHT = 1


class EmptyQueryError(ValueError):
    pass


def normalize_query(query: str) -> str:
    normalized = (query or "").strip().casefold()
    if not normalized:
        raise EmptyQueryError("Query must not be empty")
    return normalized


class SearchService:
    """
    Substring search over every post, recomputed on each call.

    Each field adds a fixed weight when it contains the query
    (case-insensitive): title 10, summary 5, any tag 3, body 1.
    """

    def __init__(self, posts_service):
        self.posts_service = posts_service

    def search(self, query: str) -> List[SearchResult]:
        needle = normalize_query(query)
        results = []

        for post in self.posts_service.list_posts():
            matched = MatchedFields()
            score = 0

            if needle in post.title.casefold():
                matched.title = True
                score += TITLE_WEIGHT

            if post.summary and needle in post.summary.casefold():
                matched.summary = True
                score += SUMMARY_WEIGHT

            if any(needle in tag.casefold() for tag in post.tags):
                matched.tags = True
                score += TAGS_WEIGHT

            if self._body_contains(post, needle):
                matched.content = True
                score += CONTENT_WEIGHT

            if score > 0:
                results.append(
                    SearchResult(post=post, matchedFields=matched, relevanceScore=score)
                )

        # Stable: equal scores keep the date-descending listing order
        results.sort(key=lambda r: r.relevanceScore, reverse=True)
        logger.debug(f"Search for {needle!r} matched {len(results)} post(s)")
        return results

    def _body_contains(self, post, needle: str) -> bool:
        try:
            detail = self.posts_service.get_post(post.category, post.slug)
        except (NotFoundError, FrontmatterError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read content for {post.fullPath}: {e}")
            return False
        return needle in detail.body.casefold()
