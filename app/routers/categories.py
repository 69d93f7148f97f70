import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.schemas.blog import CategoryNode, CategoryPage
from app.services.category_service import CategoryService
from app.services.posts_service import CategoryNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories")


@router.get("", response_model=List[str])
def list_categories(service: CategoryService = Depends(deps.get_category_service)):
    """Names of the top-level categories."""
    try:
        return service.list_top_level_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get(
    "/tree", response_model=List[CategoryNode], response_model_exclude_none=True
)
def get_category_tree(service: CategoryService = Depends(deps.get_category_service)):
    try:
        return service.build_category_tree()
    except Exception as e:
        logger.error(f"Unexpected error building category tree: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve category tree"
        )


@router.get("/{category_path:path}", response_model=CategoryPage)
def get_category(
    category_path: str,
    page: int = Query(1, ge=1),
    service: CategoryService = Depends(deps.get_category_service),
):
    """One category with its posts (paginated) and nested subcategories."""
    try:
        return service.get_category_page(category_path, page)
    except CategoryNotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving category {category_path}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve category")
