from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from svc_load_config.adapters.spec_finders.default import (
    DefaultSpecFinder,
    default_svc_config_dir,
    default_svc_config_file,
)
from svc_load_config.domain.errors import FilesystemError


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def _relative(paths, root: Path) -> list[str]:
    return [Path(p).relative_to(root).as_posix() for p in paths]


def test_walk_is_depth_first_and_sorted(tmp_path: Path) -> None:
    for name in ("b.toml", "a/z.toml", "a/b/c.toml", "c.toml", "a/a.toml"):
        _touch(tmp_path / name)
    found = _relative(DefaultSpecFinder().find([str(tmp_path)]), tmp_path)
    assert found == ["a/a.toml", "a/b/c.toml", "a/z.toml", "b.toml", "c.toml"]


def test_only_exact_toml_extension_counts(tmp_path: Path) -> None:
    for name in ("svc.toml", "svc.TOML", "svc.toml.bak", "svc.json", "toml"):
        _touch(tmp_path / name)
    assert _relative(DefaultSpecFinder().find([str(tmp_path)]), tmp_path) == ["svc.toml"]


def test_file_inputs_are_yielded_in_input_order(tmp_path: Path) -> None:
    second = _touch(tmp_path / "second.toml")
    first = _touch(tmp_path / "first.toml")
    ignored = _touch(tmp_path / "ignored.txt")
    found = list(DefaultSpecFinder().find([str(second), str(ignored), str(first)]))
    assert found == [str(second), str(first)]


def test_missing_input_raises(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError):
        list(DefaultSpecFinder().find([str(tmp_path / "absent")]))


@pytest.mark.skipif(sys.platform.startswith("win"), reason="symlinks need privileges on Windows")
def test_symlinks_inside_directories_are_skipped(tmp_path: Path) -> None:
    outside = _touch(tmp_path / "outside" / "linked.toml")
    scan = tmp_path / "scan"
    _touch(scan / "real.toml")
    (scan / "alias.toml").symlink_to(outside)
    (scan / "dir-link").symlink_to(outside.parent, target_is_directory=True)
    assert _relative(DefaultSpecFinder().find([str(scan)]), scan) == ["real.toml"]


@pytest.mark.skipif(
    sys.platform.startswith("win") or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_unreadable_directory_raises(tmp_path: Path) -> None:
    locked = tmp_path / "locked"
    _touch(locked / "svc.toml")
    locked.chmod(0)
    try:
        with pytest.raises(FilesystemError):
            list(DefaultSpecFinder().find([str(tmp_path)]))
    finally:
        locked.chmod(0o755)


def test_well_known_paths_honour_fs_root() -> None:
    env = {"FS_ROOT": "/sandbox"}
    assert default_svc_config_dir(platform="linux", env=env).as_posix() == "/sandbox/hab/sup/default/config/svc"
    assert default_svc_config_file(platform="linux", env={}).as_posix() == "/hab/sup/default/config/svc.toml"


def _deny(monkeypatch: pytest.MonkeyPatch, method: str, target: Path) -> None:
    original = getattr(Path, method)

    def guarded(self: Path, *args, **kwargs):
        if self == target:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, method, guarded)


def test_unlistable_directory_raises_filesystem_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    locked = tmp_path / "locked"
    _touch(locked / "svc.toml")
    _deny(monkeypatch, "iterdir", locked)
    with pytest.raises(FilesystemError) as excinfo:
        list(DefaultSpecFinder().find([str(tmp_path)]))
    assert excinfo.value.path == str(locked)
    assert isinstance(excinfo.value.cause, PermissionError)


def test_unsearchable_entry_raises_filesystem_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    entry = _touch(tmp_path / "locked" / "svc.toml")
    _deny(monkeypatch, "lstat", entry)
    with pytest.raises(FilesystemError) as excinfo:
        list(DefaultSpecFinder().find([str(tmp_path)]))
    assert excinfo.value.path == str(entry)
    assert isinstance(excinfo.value.cause, PermissionError)
