from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    category: str
    slug: str
    fullPath: str
    summary: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class PostDetail(PostSummary):
    body: str  # Markdown content without frontmatter


class PostPath(BaseModel):
    category: str
    slug: str


class CategoryNode(BaseModel):
    name: str
    path: str
    isDirectory: bool
    isPost: Optional[bool] = None
    children: Optional[List["CategoryNode"]] = None


class CategoryInfo(BaseModel):
    name: str
    path: str
    posts: List[PostSummary] = Field(default_factory=list)
    subcategories: List["CategoryInfo"] = Field(default_factory=list)


class CategoryPage(CategoryInfo):
    page: int = 1
    perPage: int
    totalPages: int
    totalPosts: int


class MatchedFields(BaseModel):
    title: bool = False
    summary: bool = False
    tags: bool = False
    content: bool = False


class SearchResult(BaseModel):
    post: PostSummary
    matchedFields: MatchedFields
    relevanceScore: int


class ResolvedPage(BaseModel):
    type: Literal["post", "category"]
    post: Optional[PostDetail] = None
    category: Optional[CategoryPage] = None
