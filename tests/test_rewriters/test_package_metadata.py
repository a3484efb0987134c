"""Tests for the package.json / package-lock.json rewriter."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from extpage.errors import MalformedConfigError
from extpage.rewriters import (
    rewrite_lockfile_text,
    rewrite_package_text,
    update_lockfile,
    update_package,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


class TestRewritePackage:
    def test_renames_and_drops_bin(self, package_text):
        data = json.loads(rewrite_package_text(package_text, "my-ext"))

        assert data["name"] == "my-ext"
        assert "bin" not in data

    def test_other_fields_untouched(self, package_text):
        data = json.loads(rewrite_package_text(package_text, "my-ext"))
        original = json.loads(package_text)
        original.pop("bin")
        original["name"] = "my-ext"
        assert data == original

    def test_key_order_is_kept(self, package_text):
        data = json.loads(rewrite_package_text(package_text, "my-ext"))
        assert list(data)[:3] == ["name", "version", "private"]

    def test_non_ascii_name_is_written_verbatim(self, package_text):
        out = rewrite_package_text(package_text, "扩展")
        assert '"name": "扩展"' in out

    def test_idempotent(self, package_text):
        once = rewrite_package_text(package_text, "my-ext")
        assert rewrite_package_text(once, "my-ext") == once

    def test_malformed(self):
        with pytest.raises(MalformedConfigError, match="package.json"):
            rewrite_package_text("{", "my-ext")

    @pytest.mark.asyncio
    async def test_update_package(self, tmp_path: Path, package_text):
        path = tmp_path / "package.json"
        path.write_text(package_text, encoding="utf-8")

        await update_package(path, "my-ext")

        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "my-ext"


# ---------------------------------------------------------------------------
# package-lock.json
# ---------------------------------------------------------------------------


class TestRewriteLockfile:
    def test_renames_root_and_root_package(self, lockfile_text):
        data = json.loads(rewrite_lockfile_text(lockfile_text, "my-ext"))

        assert data["name"] == "my-ext"
        assert data["packages"][""]["name"] == "my-ext"
        assert data["packages"][""]["version"] == "1.0.0"
        assert data["packages"]["node_modules/react"] == {"version": "19.0.0"}

    def test_lockfile_without_packages(self):
        data = json.loads(rewrite_lockfile_text('{"name": "old", "lockfileVersion": 1}', "new"))
        assert data == {"name": "new", "lockfileVersion": 1}

    @pytest.mark.asyncio
    async def test_update_lockfile(self, tmp_path: Path, lockfile_text):
        path = tmp_path / "package-lock.json"
        path.write_text(lockfile_text, encoding="utf-8")

        assert await update_lockfile(path, "my-ext") is True
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "my-ext"

    @pytest.mark.asyncio
    async def test_missing_lockfile_is_skipped(self, tmp_path: Path):
        path = tmp_path / "package-lock.json"

        assert await update_lockfile(path, "my-ext") is False
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_malformed_lockfile_is_fatal(self, tmp_path: Path):
        path = tmp_path / "package-lock.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(MalformedConfigError):
            await update_lockfile(path, "my-ext")
