from fastapi import Depends

from app.repos.posts_repo import FilesystemPostsRepo
from app.services.category_service import CategoryService
from app.services.posts_service import PostsService
from app.services.search_service import SearchService
from app.settings import settings


def get_posts_repo():
    return FilesystemPostsRepo(settings.posts_path)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_category_service(repo=Depends(get_posts_repo)):
    return CategoryService(repo=repo)


def get_search_service(posts_service=Depends(get_posts_service)):
    return SearchService(posts_service=posts_service)
