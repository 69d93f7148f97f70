from fastapi.testclient import TestClient

from app import dependencies as deps
from app.main import app
from app.repos.posts_repo import FilesystemPostsRepo


def test_root_endpoint():
    with TestClient(app) as client:
        res = client.get("/")

    assert res.status_code == 200
    assert res.json() == {"message": "Notes API is running"}


def test_all_routers_are_mounted(posts_dir):
    app.dependency_overrides[deps.get_posts_repo] = lambda: FilesystemPostsRepo(
        posts_dir
    )
    try:
        client = TestClient(app)
        assert client.get("/posts").status_code == 200
        assert client.get("/categories/tree").status_code == 200
        assert client.get("/search", params={"q": "rust"}).status_code == 200
        assert client.get("/pages/rust/basics").json()["type"] == "post"
    finally:
        app.dependency_overrides.clear()


def test_default_repo_reads_configured_directory(monkeypatch, tmp_path):
    monkeypatch.setattr(deps.settings, "POSTS_DIR", str(tmp_path))

    repo = deps.get_posts_repo()

    assert repo.root == tmp_path
