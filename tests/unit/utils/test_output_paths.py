"""Tests for output directory bookkeeping."""

import os

import pytest

from simforcing.core.exceptions import ConfigurationError
from simforcing.utils.output_paths import (
    ActiveLinkStyle,
    RemovePreexistingStyle,
    generate_output_path,
)

pytestmark = [pytest.mark.unit, pytest.mark.quick]


class TestActiveLinkStyle:
    def test_creates_first_folder_and_link(self, tmp_path):
        base = tmp_path / "dormouse"
        active = generate_output_path(base)

        assert active == base / "output_active"
        assert active.is_symlink()
        assert os.readlink(active) == "output_0000"
        assert (base / "output_0000").is_dir()

    def test_increments_counter(self, tmp_path):
        base = tmp_path / "dormouse"
        generate_output_path(base)
        generate_output_path(base)
        active = generate_output_path(base, ActiveLinkStyle())

        assert os.readlink(active) == "output_0002"
        assert sorted(p.name for p in base.iterdir()) == [
            "output_0000",
            "output_0001",
            "output_0002",
            "output_active",
        ]

    def test_follows_existing_link(self, tmp_path):
        (tmp_path / "output_0005").mkdir()
        os.symlink("output_0005", tmp_path / "output_active")

        active = generate_output_path(tmp_path)
        assert os.readlink(active) == "output_0006"

    def test_existing_folders_without_link(self, tmp_path):
        for name in ("output_0000", "output_0003", "unrelated"):
            (tmp_path / name).mkdir()

        active = generate_output_path(tmp_path)
        assert os.readlink(active) == "output_0004"

    def test_link_to_unknown_name(self, tmp_path):
        (tmp_path / "elsewhere").mkdir()
        os.symlink("elsewhere", tmp_path / "output_active")

        with pytest.raises(ConfigurationError, match="do not handle"):
            generate_output_path(tmp_path)

    def test_data_written_through_link(self, tmp_path):
        active = generate_output_path(tmp_path)
        (active / "out.txt").write_text("hello")
        assert (tmp_path / "output_0000" / "out.txt").read_text() == "hello"


class TestRemovePreexistingStyle:
    def test_removes_existing(self, tmp_path, caplog):
        target = tmp_path / "run"
        target.mkdir()
        (target / "old.txt").write_text("old")

        with caplog.at_level("WARNING"):
            path = generate_output_path(target, RemovePreexistingStyle())

        assert path == target
        assert path.is_dir()
        assert list(path.iterdir()) == []
        assert "Removing" in caplog.text

    def test_creates_missing(self, tmp_path):
        path = generate_output_path(tmp_path / "a" / "b", RemovePreexistingStyle())
        assert path.is_dir()


def test_unknown_style(tmp_path):
    with pytest.raises(TypeError):
        generate_output_path(tmp_path, style="fancy")
