"""Tests for pruning the files of non-selected variants."""

from __future__ import annotations

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from extpage.scaffolder import prune, remove_path

pytestmark = pytest.mark.unit


@pytest.fixture
def project(template_root: Path, tmp_path: Path) -> Path:
    target = tmp_path / "project"
    shutil.copytree(template_root, target)
    return target


class TestRemovePath:
    def test_removes_file(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("x")
        assert remove_path(f) is True
        assert not f.exists()

    def test_removes_directory_tree(self, tmp_path):
        d = tmp_path / "d" / "e"
        d.mkdir(parents=True)
        (d / "f.txt").write_text("x")
        assert remove_path(tmp_path / "d") is True
        assert not (tmp_path / "d").exists()

    def test_missing_path_is_silent(self, tmp_path):
        assert remove_path(tmp_path / "nope") is False

    def test_other_errors_propagate(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("x")
        with patch.object(Path, "unlink", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                remove_path(f)


class TestPrune:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("selected", ["newtab", "history", "bookmarks"])
    async def test_only_selected_variant_remains(self, project, registry, selected):
        await prune(project, selected, registry)

        for variant in registry:
            for relative in variant.exclusive_paths:
                assert (project / relative).exists() == (variant.id == selected), relative

    @pytest.mark.asyncio
    async def test_shared_files_are_kept(self, project, registry):
        await prune(project, "history", registry)

        assert (project / "src" / "popup.html").exists()
        assert (project / "src" / "components" / "NewTabHeader" / "index.tsx").exists()
        assert (project / "src" / "manifest.json").exists()

    @pytest.mark.asyncio
    async def test_returns_removed_paths(self, project, registry):
        removed = await prune(project, "history", registry)

        assert sorted(p.relative_to(project).as_posix() for p in removed) == sorted([
            "src/newtab.html",
            "src/newtab",
            "src/components/NewTabContent",
            "src/bookmarks.html",
            "src/bookmarks",
            "src/components/BookmarksContent",
        ])

    @pytest.mark.asyncio
    async def test_second_prune_is_a_no_op(self, project, registry, tree_snapshot):
        await prune(project, "bookmarks", registry)
        after_first = tree_snapshot(project)

        removed = await prune(project, "bookmarks", registry)

        assert removed == []
        assert tree_snapshot(project) == after_first

    @pytest.mark.asyncio
    async def test_permission_error_is_fatal(self, project, registry):
        with patch("extpage.scaffolder.pruner.shutil.rmtree", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                await prune(project, "newtab", registry)
