import os

import pytest

from app.repos.posts_repo import FilesystemPostsRepo
from app.schemas.blog import CategoryPage
from app.services.category_service import CategoryService
from app.services.posts_service import CategoryNotFoundError, NotFoundError
from tests.conftest import write_post


def _by_name(nodes):
    return {node.name: node for node in nodes}


def test_build_category_tree_mirrors_directories(repo):
    tree = _by_name(CategoryService(repo, url_prefix="/post").build_category_tree())

    assert set(tree) == {"hello", "rust", "go"}

    hello = tree["hello"]
    assert hello.isDirectory is False
    assert hello.isPost is True
    assert hello.children is None
    assert hello.path == "/post/hello"

    rust = tree["rust"]
    assert rust.isDirectory is True
    assert rust.isPost is None
    assert rust.path == "/post/rust"
    rust_children = _by_name(rust.children)
    assert set(rust_children) == {"basics", "async"}
    assert rust_children["basics"].path == "/post/rust/basics"
    assert _by_name(rust_children["async"].children)["tokio"].path == (
        "/post/rust/async/tokio"
    )


def test_tree_includes_files_that_fail_parsing(repo):
    go = _by_name(CategoryService(repo).build_category_tree())["go"]

    assert {child.name for child in go.children} == {"intro", "broken"}


def test_tree_children_follow_listing_order(repo, monkeypatch):
    real_scandir = os.scandir

    def reversed_scandir(path):
        return list(reversed(sorted(real_scandir(path), key=lambda e: e.name)))

    monkeypatch.setattr(os, "scandir", reversed_scandir)

    tree = CategoryService(repo).build_category_tree()

    assert [node.name for node in tree] == ["rust", "hello", "go"]


def test_tree_for_missing_root_is_empty(tmp_path):
    assert CategoryService(FilesystemPostsRepo(tmp_path / "none")).build_category_tree() == []


def test_get_category_info_expands_recursively(repo):
    info = CategoryService(repo, url_prefix="/post").get_category_info("rust")

    assert info.name == "rust"
    assert info.path == "/post/rust"
    assert [p.slug for p in info.posts] == ["basics"]
    assert len(info.subcategories) == 1
    sub = info.subcategories[0]
    assert sub.name == "async"
    assert sub.path == "/post/rust/async"
    assert [p.category for p in sub.posts] == ["rust/async"]
    assert sub.subcategories == []


def test_get_category_info_skips_malformed_posts(repo):
    info = CategoryService(repo).get_category_info("go")

    assert [p.slug for p in info.posts] == ["intro"]


def test_get_category_info_sorts_posts_by_date_desc(tmp_path):
    write_post(tmp_path, "c/old.md", '---\ndate: "2020-01-01"\n---\n')
    write_post(tmp_path, "c/new.md", '---\ndate: "2022-01-01"\n---\n')
    write_post(tmp_path, "c/mid.md", '---\ndate: "2021-01-01"\n---\n')

    info = CategoryService(FilesystemPostsRepo(tmp_path)).get_category_info("/c/")

    assert [p.slug for p in info.posts] == ["new", "mid", "old"]


@pytest.mark.parametrize("path", ["missing", "rust/nope", "hello.md", "../etc"])
def test_get_category_info_missing_raises_not_found(repo, path):
    with pytest.raises(CategoryNotFoundError) as exc_info:
        CategoryService(repo).get_category_info(path)

    assert isinstance(exc_info.value, NotFoundError)


def test_get_category_page_paginates_posts(tmp_path):
    for day in range(1, 8):
        write_post(tmp_path, f"log/day{day}.md", f'---\ndate: "2024-01-0{day}"\n---\n')
    service = CategoryService(FilesystemPostsRepo(tmp_path))

    first = service.get_category_page("log", page=1, per_page=5)
    second = service.get_category_page("log", page=2, per_page=5)

    assert isinstance(first, CategoryPage)
    assert [p.slug for p in first.posts] == ["day7", "day6", "day5", "day4", "day3"]
    assert [p.slug for p in second.posts] == ["day2", "day1"]
    assert first.totalPages == 2
    assert first.totalPosts == 7
    assert second.page == 2


def test_get_category_page_past_the_end_is_empty(repo):
    page = CategoryService(repo).get_category_page("rust", page=9, per_page=5)

    assert page.posts == []
    assert page.totalPages == 1


def test_is_category(repo):
    service = CategoryService(repo)
    assert service.is_category("rust/async") is True
    assert service.is_category("rust/basics") is False


def test_list_top_level_categories(repo):
    assert sorted(CategoryService(repo).list_top_level_categories()) == ["go", "rust"]
