#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for media discovery: staged-index lookup and the fallback walk.
"""

import errno
import os
import types
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from media_optimizer.models.media_file import SourceFile
from media_optimizer.scanning.discovery import (
    MediaDiscovery, is_already_optimized, partition, walk_depth_first
)
from media_optimizer.vcs.git import GitIndex
from media_optimizer.tests.fixtures.media_setup import make_config, make_tree, touch_output


def _git(staged):
    git = MagicMock(spec=GitIndex)
    git.list_staged_paths.return_value = staged
    return git


def _symlink_or_skip(target: Path, link: Path):
    try:
        link.symlink_to(target, target_is_directory=target.is_dir())
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks unavailable: {e}")


class TestWalkDepthFirst:
    """Test the lazy directory walk."""

    def test_yields_nested_files(self, tmp_path):
        make_tree(tmp_path, ["a.jpg", "sub/b.png", "sub/deeper/c.mov"])
        found = sorted(p.relative_to(tmp_path).as_posix() for p in walk_depth_first(tmp_path))
        assert found == ["a.jpg", "sub/b.png", "sub/deeper/c.mov"]

    def test_is_lazy(self, tmp_path):
        make_tree(tmp_path, ["a.jpg"])
        walker = walk_depth_first(tmp_path)
        assert isinstance(walker, types.GeneratorType)
        assert next(walker) == tmp_path / "a.jpg"
        with pytest.raises(StopIteration):
            next(walker)

    def test_depth_first_order(self, tmp_path):
        make_tree(tmp_path, ["a/inner.jpg", "b.jpg"])
        names = [p.name for p in walk_depth_first(tmp_path)]
        assert names == ["inner.jpg", "b.jpg"]

    def test_missing_root_yields_nothing(self, tmp_path):
        assert list(walk_depth_first(tmp_path / "nope")) == []

    def test_unreadable_subtree_does_not_stop_walk(self, tmp_path):
        make_tree(tmp_path, ["locked/hidden.jpg", "open/visible.jpg", "top.png"])
        real_scandir = os.scandir

        def flaky_scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("media_optimizer.scanning.discovery.os.scandir", side_effect=flaky_scandir):
            with patch("media_optimizer.scanning.discovery.logger") as mock_logger:
                names = {p.name for p in walk_depth_first(tmp_path)}

        assert names == {"visible.jpg", "top.png"}
        assert mock_logger.warning.called

    def test_self_referencing_symlink(self, tmp_path):
        make_tree(tmp_path, ["a/pic.jpg", "b/other.jpg"])
        _symlink_or_skip(tmp_path, tmp_path / "a" / "loop")

        names = sorted(p.relative_to(tmp_path).as_posix() for p in walk_depth_first(tmp_path))
        assert names == ["a/pic.jpg", "b/other.jpg"]

    def test_symlinked_directory_not_followed(self, tmp_path):
        origin, outside = tmp_path / "origin", tmp_path / "family_photos"
        make_tree(origin, ["mine.jpg"])
        make_tree(outside, ["grandma.jpg"])
        _symlink_or_skip(outside, origin / "linked")

        assert [p.name for p in walk_depth_first(origin)] == ["mine.jpg"]

    def test_symlinked_file_not_yielded(self, tmp_path):
        origin = tmp_path / "origin"
        make_tree(origin, ["mine.jpg"])
        make_tree(tmp_path, ["elsewhere.jpg"])
        _symlink_or_skip(tmp_path / "elsewhere.jpg", origin / "alias.jpg")

        assert [p.name for p in walk_depth_first(origin)] == ["mine.jpg"]

    def test_entry_error_skips_only_that_entry(self, tmp_path):
        make_tree(tmp_path, ["bad.jpg", "good.jpg"])
        real_scandir = os.scandir

        class BrokenEntry:
            def __init__(self, entry):
                self.name, self.path = entry.name, entry.path

            def is_dir(self, follow_symlinks=True):
                raise OSError(errno.ELOOP, "Too many levels of symbolic links", self.path)

            is_file = is_dir

        @contextmanager
        def flaky_scandir(path):
            with real_scandir(path) as it:
                yield [BrokenEntry(e) if e.name == "bad.jpg" else e for e in it]

        with patch("media_optimizer.scanning.discovery.os.scandir", side_effect=flaky_scandir):
            with patch("media_optimizer.scanning.discovery.logger") as mock_logger:
                names = [p.name for p in walk_depth_first(tmp_path)]

        assert names == ["good.jpg"]
        mock_logger.warning.assert_called_once()


class TestSourceFile:
    """Test extension recognition."""

    @pytest.mark.parametrize("name,kind", [
        ("a.jpg", "image"), ("a.JPEG", "image"), ("a.Png", "image"),
        ("a.heic", "image"), ("a.HEIF", "image"), ("a.MOV", "video"),
    ])
    def test_recognized(self, name, kind):
        source = SourceFile.from_path(Path("/x") / name)
        assert source is not None
        assert source.kind == kind

    @pytest.mark.parametrize("name", ["a.gif", "a.txt", "a.mp4", "a.avif", "README"])
    def test_unrecognized(self, name):
        assert SourceFile.from_path(Path("/x") / name) is None

    def test_heif_flag_and_output_name(self):
        source = SourceFile(Path("/x/origin/trip/IMG_01.HEIC"))
        assert source.is_heif
        assert source.basename == "IMG_01"
        assert source.output_path(Path("/x/images"), ".avif") == Path("/x/images/IMG_01.avif")


class TestFallbackDiscovery:
    """Test discovery by walking the origin directory."""

    def test_finds_unoptimized_media(self, tmp_path):
        config = make_config(tmp_path, use_staged=False)
        make_tree(config.origin_dir, ["photo1.jpg", "nested/photo2.PNG", "clip1.mov", "notes.txt"])

        found = MediaDiscovery(config, _git(None)).discover(announce=False)

        assert sorted(s.path.name for s in found) == ["clip1.mov", "photo1.jpg", "photo2.PNG"]

    def test_skips_files_with_existing_output(self, tmp_path):
        config = make_config(tmp_path, use_staged=False)
        make_tree(config.origin_dir, ["done.jpg", "todo.jpg", "clip.mov", "newclip.mov"])
        touch_output(config, "done.avif")
        touch_output(config, "clip.mp4")

        found = MediaDiscovery(config, _git(None)).discover(announce=False)

        assert sorted(s.path.name for s in found) == ["newclip.mov", "todo.jpg"]

    def test_webp_alone_does_not_mark_image_done(self, tmp_path):
        config = make_config(tmp_path, use_staged=False)
        make_tree(config.origin_dir, ["half.jpg"])
        touch_output(config, "half.webp")

        found = MediaDiscovery(config, _git(None)).discover(announce=False)
        assert [s.path.name for s in found] == ["half.jpg"]

    def test_second_pass_after_conversion_finds_nothing(self, tmp_path):
        config = make_config(tmp_path, use_staged=False, delete_sources=False)
        make_tree(config.origin_dir, ["a.jpg", "b.png"])
        touch_output(config, "a.avif")
        touch_output(config, "b.avif")

        assert MediaDiscovery(config, _git(None)).discover(announce=False) == []

    def test_is_already_optimized(self, tmp_path):
        config = make_config(tmp_path)
        source = SourceFile(config.origin_dir / "x.jpg")
        assert not is_already_optimized(source, config)
        touch_output(config, "x.avif")
        assert is_already_optimized(source, config)

    def test_use_staged_false_never_queries_git(self, tmp_path):
        config = make_config(tmp_path, use_staged=False)
        make_tree(config.origin_dir, ["a.jpg"])
        git = _git([config.origin_dir / "a.jpg"])

        MediaDiscovery(config, git).discover(announce=False)
        git.list_staged_paths.assert_not_called()


class TestStagedDiscovery:
    """Test discovery from the git staging index."""

    def test_filters_to_origin_media(self, tmp_path):
        config = make_config(tmp_path)
        make_tree(config.origin_dir, ["a.jpg", "sub/b.mov"])
        staged = [
            config.origin_dir / "a.jpg",
            config.origin_dir / "sub" / "b.mov",
            config.origin_dir / "readme.md",
            tmp_path / "elsewhere" / "c.jpg",
            tmp_path / "origin.jpg",
        ]

        found = MediaDiscovery(config, _git(staged)).discover(announce=False)

        assert [s.path for s in found] == [config.origin_dir / "a.jpg", config.origin_dir / "sub" / "b.mov"]

    def test_staged_ignores_existing_output(self, tmp_path):
        config = make_config(tmp_path)
        make_tree(config.origin_dir, ["done.jpg"])
        touch_output(config, "done.avif")

        found = MediaDiscovery(config, _git([config.origin_dir / "done.jpg"])).discover(announce=False)
        assert [s.path.name for s in found] == ["done.jpg"]

    def test_falls_back_when_git_fails(self, tmp_path):
        config = make_config(tmp_path)
        make_tree(config.origin_dir, ["a.jpg"])

        found = MediaDiscovery(config, _git(None)).discover(announce=False)
        assert [s.path.name for s in found] == ["a.jpg"]

    def test_falls_back_when_nothing_relevant_staged(self, tmp_path):
        config = make_config(tmp_path)
        make_tree(config.origin_dir, ["a.jpg"])

        found = MediaDiscovery(config, _git([tmp_path / "src" / "app.py"])).discover(announce=False)
        assert [s.path.name for s in found] == ["a.jpg"]

    def test_discover_staged_returns_none_on_failure(self, tmp_path):
        config = make_config(tmp_path)
        assert MediaDiscovery(config, _git(None)).discover_staged() is None


class TestPartition:
    def test_keeps_order(self):
        sources = [SourceFile(Path(n)) for n in ["/o/1.mov", "/o/2.jpg", "/o/3.mov", "/o/4.png"]]
        images, videos = partition(sources)
        assert [s.path.name for s in images] == ["2.jpg", "4.png"]
        assert [s.path.name for s in videos] == ["1.mov", "3.mov"]

    def test_announce_prints_summary(self, tmp_path):
        config = make_config(tmp_path, use_staged=False)
        make_tree(config.origin_dir, ["a.jpg", "b.mov"])
        with patch('builtins.print') as mock_print:
            MediaDiscovery(config, _git(None)).discover()
        printed = [call.args[0] for call in mock_print.call_args_list if call.args]
        assert any("Discovery complete: 2" in line for line in printed)
        assert any("1 images, 1 videos" in line for line in printed)
