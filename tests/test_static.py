"""Tests for burrow.middleware.static — built assets with SPA shell fallback."""

from pathlib import Path

import pytest

from burrow.http.request import Request
from burrow.middleware.static import StaticAssets, content_type_for

SHELL = "<!doctype html><div id=app></div>"


@pytest.fixture
def dist(tmp_path: Path) -> Path:
    """Create a temporary built-assets directory."""
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text(SHELL)
    (root / "assets" / "app.js").write_text("console.log('hi');")
    (root / "assets" / "style.css").write_text("body{}")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "data.bin").write_bytes(b"\x00\x01")
    (tmp_path / "secret.txt").write_text("top secret")
    return root


def _get(path: str, method: str = "GET") -> Request:
    return Request(method=method, path=path)


class TestAssets:
    async def test_serves_file(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/assets/app.js"))
        assert response.status == 200
        assert response.text == "console.log('hi');"
        assert response.content_type.startswith("text/javascript")
        assert response.header("Content-Length") == str(len("console.log('hi');"))
        assert response.header("Cache-Control") == "public, max-age=3600"

    async def test_binary(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/logo.png"))
        assert response.content_type == "image/png"
        assert response.body_bytes.startswith(b"\x89PNG")

    async def test_unknown_extension(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/data.bin"))
        assert response.content_type == "application/octet-stream"

    async def test_custom_cache_control(self, dist: Path) -> None:
        assets = StaticAssets(dist, cache_control="public, max-age=31536000, immutable")
        response = await assets(_get("/assets/style.css"))
        assert response.header("Cache-Control") == "public, max-age=31536000, immutable"


class TestShellFallback:
    async def test_missing_file_serves_shell(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/users/42/profile"))
        assert response.status == 200
        assert response.text == SHELL
        assert response.content_type == "text/html; charset=utf-8"
        assert response.header("Cache-Control") == "no-cache"

    async def test_root_serves_shell(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/"))
        assert response.status == 200
        assert response.text == SHELL

    async def test_directory_serves_shell(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/assets"))
        assert response.text == SHELL

    async def test_missing_asset_with_extension_serves_shell(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/assets/missing.js"))
        assert response.content_type == "text/html; charset=utf-8"

    async def test_missing_shell_is_404(self, dist: Path) -> None:
        (dist / "index.html").unlink()
        response = await StaticAssets(dist)(_get("/anything"))
        assert response.status == 404

    async def test_nul_byte_in_path_serves_shell(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/a\x00b.js"))
        assert response.status == 200
        assert response.text == SHELL

    async def test_nul_byte_without_shell_is_404(self, dist: Path) -> None:
        (dist / "index.html").unlink()
        response = await StaticAssets(dist)(_get("/assets/a\x00b.js"))
        assert response.status == 404

    async def test_custom_shell(self, dist: Path) -> None:
        (dist / "app.html").write_text("<p>custom</p>")
        response = await StaticAssets(dist, shell="app.html")(_get("/x"))
        assert response.text == "<p>custom</p>"


class TestMethods:
    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
    async def test_other_methods_404(self, dist: Path, method: str) -> None:
        response = await StaticAssets(dist)(_get("/users/1", method=method))
        assert response.status == 404
        assert SHELL not in response.text

    async def test_head_has_no_body(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/assets/app.js", method="HEAD"))
        assert response.status == 200
        assert response.body_bytes == b""
        assert response.header("Content-Length") == str(len("console.log('hi');"))


class TestSecurity:
    async def test_traversal_blocked(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/../secret.txt"))
        assert response.status == 403

    async def test_nested_traversal_blocked(self, dist: Path) -> None:
        response = await StaticAssets(dist)(_get("/assets/../../secret.txt"))
        assert response.status == 403


class TestContentTypeFor:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.html", "text/html; charset=utf-8"),
            ("a.CSS", "text/css; charset=utf-8"),
            ("a.mjs", "text/javascript; charset=utf-8"),
            ("a.json", "application/json"),
            ("a.svg", "image/svg+xml"),
            ("a.woff2", "font/woff2"),
            ("a.wasm", "application/wasm"),
            ("a", "application/octet-stream"),
        ],
    )
    def test_table(self, name: str, expected: str) -> None:
        assert content_type_for(name) == expected
