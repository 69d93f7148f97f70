import logging

from fastapi import FastAPI

from app.routers import categories, posts, search
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, description="Markdown notes served from disk")

app.include_router(posts.router)
app.include_router(categories.router)
app.include_router(search.router)

logger.info(f"Serving posts from {settings.posts_path}")


@app.get("/")
async def root():
    return {"message": "Notes API is running"}
