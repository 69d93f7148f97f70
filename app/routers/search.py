import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.schemas.blog import SearchResult
from app.services.search_service import EmptyQueryError, SearchService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=List[SearchResult])
def search_posts(
    q: str = Query("", description="Text to look for"),
    service: SearchService = Depends(deps.get_search_service),
):
    try:
        return service.search(q)
    except EmptyQueryError:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Search error for {q!r}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
