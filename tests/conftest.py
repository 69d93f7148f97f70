import textwrap
from pathlib import Path

import pytest

from app.repos.posts_repo import FilesystemPostsRepo
from app.schemas.blog import PostDetail


def write_post(root: Path, relative_path: str, raw: str) -> Path:
    """Write a markdown file under root, dedenting the triple-quoted source."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(raw).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    """
    A small posts tree:

        hello.md
        rust/basics.md
        rust/async/tokio.md
        go/intro.md
        go/broken.md   (no frontmatter)
    """
    root = tmp_path / "posts"
    root.mkdir()
    write_post(
        root,
        "hello.md",
        """
        ---
        title: Hello
        date: "2023-01-01"
        summary: First note
        ---
        ## Hi

        Welcome.
        """,
    )
    write_post(
        root,
        "rust/basics.md",
        """
        ---
        title: Rust Basics
        date: "2024-03-01"
        tags: [rust]
        ---
        ## Ownership

        Borrowing explained.
        """,
    )
    write_post(
        root,
        "rust/async/tokio.md",
        """
        ---
        title: Tokio Runtime
        date: "2024-05-10"
        summary: Async executors
        tags: rust
        ---
        ## Runtime

        Spawning tasks.
        """,
    )
    write_post(
        root,
        "go/intro.md",
        """
        ---
        title: Go Intro
        date: "2024-04-01"
        summary: rust comparison
        ---
        ## Goroutines

        Channels everywhere.
        """,
    )
    write_post(
        root,
        "go/broken.md",
        """
        # No frontmatter here

        Just text.
        """,
    )
    return root


@pytest.fixture
def repo(posts_dir):
    return FilesystemPostsRepo(posts_dir)


class FakePostsService:
    """
    Minimal posts service stand-in for search and router tests.
    """

    def __init__(self, posts=None, bodies=None, errors=None):
        self.posts = posts or []
        self.bodies = bodies or {}
        self.errors = errors or {}
        self.calls = []

    def list_posts(self):
        return list(self.posts)

    def get_post(self, category: str, slug: str):
        self.calls.append((category, slug))
        if slug in self.errors:
            raise self.errors[slug]
        post = next(p for p in self.posts if p.slug == slug)
        return PostDetail(**post.model_dump(), body=self.bodies.get(slug, ""))
