import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.repos.posts_repo import split_post_path
from app.schemas.blog import PostDetail, PostPath, PostSummary, ResolvedPage
from app.services.category_service import CategoryService
from app.services.frontmatter_parser import FrontmatterError
from app.services.posts_service import (
    CategoryNotFoundError,
    PostNotFoundError,
    PostsService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    category: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts metadata, optionally limited to one category."""
    try:
        if category is not None:
            return service.list_posts_by_category(category)
        return service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/post-paths", response_model=List[PostPath])
def list_post_paths(service: PostsService = Depends(deps.get_posts_service)):
    """Every (category, slug) pair, for static page generation."""
    try:
        return service.list_post_paths()
    except Exception as e:
        logger.error(f"Unexpected error listing post paths: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post paths")


@router.get("/category-paths", response_model=List[str])
def list_category_paths(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_category_paths()
    except Exception as e:
        logger.error(f"Unexpected error listing category paths: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve category paths"
        )


@router.get("/posts/{post_path:path}", response_model=PostDetail)
def get_post(
    post_path: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post; the last path segment is the slug."""
    category, slug = split_post_path(post_path.strip("/"))
    try:
        return service.get_post(category, slug)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except FrontmatterError as e:
        logger.warning(f"Malformed post {post_path}: {e}")
        raise HTTPException(status_code=422, detail=f"Malformed post: {e}")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_path}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/pages/{page_path:path}", response_model=ResolvedPage)
def resolve_page(
    page_path: str,
    page: int = Query(1, ge=1),
    posts: PostsService = Depends(deps.get_posts_service),
    categories: CategoryService = Depends(deps.get_category_service),
):
    """Resolve a /post/... URL to either a post or a category listing."""
    page_path = page_path.strip("/")
    category, slug = split_post_path(page_path)
    try:
        if slug and posts.post_exists(category, slug):
            return ResolvedPage(type="post", post=posts.get_post(category, slug))
        return ResolvedPage(
            type="category", category=categories.get_category_page(page_path, page)
        )
    except (PostNotFoundError, CategoryNotFoundError):
        raise HTTPException(status_code=404, detail="Page not found")
    except FrontmatterError as e:
        logger.warning(f"Malformed post {page_path}: {e}")
        raise HTTPException(status_code=422, detail=f"Malformed post: {e}")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error resolving page {page_path}: {e}")
        raise HTTPException(status_code=500, detail="Failed to resolve page")
