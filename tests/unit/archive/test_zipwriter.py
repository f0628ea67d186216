"""Tests for the zip archive writer."""

import os
import stat
import zipfile
from pathlib import Path

import pytest
from clannad.archive.base import ArchiveError, ArchiveWriteError
from clannad.archive.zipwriter import ZipArchiveWriter, member_name
from clannad.models.entry import Entry, EntryKind
from clannad.scanners import BasicPolicy, FollowPolicy, PreservingPolicy, Scanner
from clannad.scanners.base import ScanPolicy


def _archive(root: str, policy: ScanPolicy, out: Path) -> zipfile.ZipFile:
    manifest = Scanner(root, policy).scan()
    assert manifest is not None
    with ZipArchiveWriter(out) as writer:
        results = writer.write_archive(manifest)
    assert all(r.success for r in results)
    return zipfile.ZipFile(out)


class TestMemberName:
    """Tests for member_name."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("root/a.txt", "root/a.txt"),
            ("/abs/a.txt", "abs/a.txt"),
            ("./root//sub/./b.txt", "root/sub/b.txt"),
            ("root/sub/../a.txt", "root/a.txt"),
            (".", ""),
        ],
    )
    def test_normalizes(self, path: str, expected: str) -> None:
        """Paths are made relative and normalized."""
        assert member_name(path) == expected

    def test_directory_suffix(self) -> None:
        """Directory members end with a slash."""
        assert member_name("root/sub", directory=True) == "root/sub/"

    def test_current_directory_has_no_name(self) -> None:
        """The current directory maps to the empty name even as a directory."""
        assert member_name(".", directory=True) == ""

    @pytest.mark.parametrize("path", ["../x", "a/../../x", ".."])
    def test_rejects_parent_escape(self, path: str) -> None:
        """Paths climbing above the archive root are illegal."""
        with pytest.raises(ArchiveWriteError, match="illegal path"):
            member_name(path)


class TestZipArchiveWriter:
    """Tests for ZipArchiveWriter on disk."""

    def test_preserve_policy(self, disk_tree: Path, tmp_path: Path) -> None:
        """Files, directories, and symlinks are written as their own records."""
        zf = _archive("root", PreservingPolicy(), tmp_path / "out.zip")

        assert set(zf.namelist()) == {
            "root/",
            "root/a.txt",
            "root/sub/",
            "root/sub/b.txt",
            "root/link",
        }
        assert zf.read("root/a.txt") == b"123456"

        link = zf.getinfo("root/link")
        assert link.create_system == 3
        assert stat.S_ISLNK(link.external_attr >> 16)
        assert zf.read("root/link") == b"sub"

    def test_follow_policy(self, disk_tree: Path, tmp_path: Path) -> None:
        """Linked directories are materialized with their children."""
        zf = _archive("root", FollowPolicy(), tmp_path / "out.zip")

        names = set(zf.namelist())
        assert {"root/link/", "root/link/b.txt", "root/sub/b.txt"} <= names
        assert zf.read("root/link/b.txt") == b"abc"
        assert zf.getinfo("root/link/").is_dir()
        assert not any(stat.S_ISLNK(i.external_attr >> 16) for i in zf.infolist())

    def test_basic_policy(self, disk_tree: Path, tmp_path: Path) -> None:
        """Under the basic policy a directory link is an empty directory."""
        zf = _archive("root", BasicPolicy(), tmp_path / "out.zip")

        names = set(zf.namelist())
        assert "root/link/" in names
        assert "root/link/b.txt" not in names

    def test_archive_root_has_no_marker(self, disk_tree: Path, tmp_path: Path) -> None:
        """Scanning "." writes children without a marker for the root itself."""
        zf = _archive(".", PreservingPolicy(), tmp_path / "out.zip")
        assert "" not in zf.namelist()
        assert "root/a.txt" in zf.namelist()

    def test_illegal_path_is_failed_result(self, disk_tree: Path, tmp_path: Path) -> None:
        """An entry escaping the archive root fails without aborting."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            bad = writer.write_entry(Entry("../x", "root/a.txt", EntryKind.REGULAR))
            good = writer.write_entry(Entry("root/a.txt", "root/a.txt", EntryKind.REGULAR))

        assert bad.success is False
        assert good.success is True
        assert zipfile.ZipFile(tmp_path / "out.zip").namelist() == ["root/a.txt"]

    def test_missing_content_is_failed_result(self, tmp_path: Path) -> None:
        """A content source that cannot be read fails its entry."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            result = writer.write_entry(
                Entry("gone.txt", str(tmp_path / "gone.txt"), EntryKind.REGULAR)
            )
        assert result.success is False

    def test_duplicate_member_rejected(self, disk_tree: Path, tmp_path: Path) -> None:
        """The same member name cannot be written twice."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            writer.write_file("root/a.txt", "root/a.txt")
            with pytest.raises(ArchiveWriteError, match="already in the archive"):
                writer.write_file("root/a.txt", "root/a.txt")
            with pytest.raises(ArchiveWriteError):
                writer.write_symlink("root/a.txt", "elsewhere")

    def test_broken_entry_skipped(self, tmp_path: Path) -> None:
        """Broken entries leave no record in the zip."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            result = writer.write_entry(Entry("r/dangling", "r/dangling", EntryKind.BROKEN))

        assert result.skipped is True
        assert zipfile.ZipFile(tmp_path / "out.zip").namelist() == []

    def test_copy_dir_clones_marker(self, tmp_path: Path) -> None:
        """An aliased directory copies the attributes of its source marker."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            writer.write_dir("r/sub")
            writer.copy_dir("r/sub", "r/link")

        zf = zipfile.ZipFile(tmp_path / "out.zip")
        source = zf.getinfo("r/sub/")
        alias = zf.getinfo("r/link/")
        assert alias.is_dir()
        assert alias.external_attr == source.external_attr

    def test_copy_dir_without_source(self, tmp_path: Path) -> None:
        """Copying a directory not yet archived writes a fresh marker."""
        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            writer.copy_dir("elsewhere", "r/link")

        assert zipfile.ZipFile(tmp_path / "out.zip").namelist() == ["r/link/"]

    def test_stored_compression(self, disk_tree: Path, tmp_path: Path) -> None:
        """The configured compression method is applied to files."""
        with ZipArchiveWriter(tmp_path / "out.zip", compression="stored") as writer:
            writer.write_file("root/a.txt", "root/a.txt")

        info = zipfile.ZipFile(tmp_path / "out.zip").getinfo("root/a.txt")
        assert info.compress_type == zipfile.ZIP_STORED

    def test_finish_is_idempotent(self, tmp_path: Path) -> None:
        """Finishing twice is harmless."""
        writer = ZipArchiveWriter(tmp_path / "out.zip")
        writer.finish()
        writer.finish()
        assert zipfile.is_zipfile(tmp_path / "out.zip")

    def test_unwritable_location(self, tmp_path: Path) -> None:
        """Creating a zip in a missing directory raises ArchiveError."""
        with pytest.raises(ArchiveError, match="Cannot create archive"):
            ZipArchiveWriter(tmp_path / "missing" / "out.zip")

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
    def test_fifo_is_failed_result(self, tmp_path: Path) -> None:
        """A special file classified as regular is reported instead of read."""
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)

        with ZipArchiveWriter(tmp_path / "out.zip") as writer:
            result = writer.write_entry(Entry("pipe", str(fifo), EntryKind.REGULAR))

        assert result.success is False
        assert "not a regular file" in (result.error or "")
        assert zipfile.ZipFile(tmp_path / "out.zip").namelist() == []

    def test_parent_step_through_symlinked_dir(
        self, parent_step_tree: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A file reached through a parent step out of a directory symlink is archived."""
        monkeypatch.chdir(parent_step_tree.parent)
        zf = _archive("root", FollowPolicy(), tmp_path / "out.zip")
        assert zf.read("root/l") == b"parent"
