"""Filesystem discovery of service config files.

Purpose
-------
Implement the :class:`svc_load_config.application.ports.SpecFinder` protocol
and own the well-known supervisor config locations. This adapter is the only
component that understands traversal order and platform path conventions.

Contents
--------
* :class:`DefaultSpecFinder` – recursive, name-sorted ``.toml`` discovery.
* :func:`default_config_root` – ``<fs root>/hab/sup/default/config``.
* :func:`default_svc_config_dir` / :func:`default_svc_config_file` – the bulk
  scan root and the shared default file.
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from ...domain.errors import FilesystemError
from ...observability import log_debug

SVC_CONFIG_EXTENSION = ".toml"
"""Only files with exactly this suffix are treated as service configs."""


def default_config_root(*, platform: str | None = None, env: Mapping[str, str] | None = None) -> Path:
    """Return the supervisor default config directory for *platform*.

    ``FS_ROOT`` prefixes the path the same way the supervisor honours it;
    Windows installs live under ``%SystemDrive%``.

    Examples
    --------
    >>> default_config_root(platform="linux", env={}).as_posix()
    '/hab/sup/default/config'
    >>> default_config_root(platform="linux", env={"FS_ROOT": "/tmp/root"}).as_posix()
    '/tmp/root/hab/sup/default/config'
    """

    environ = os.environ if env is None else env
    target = platform or sys.platform
    fs_root = environ.get("FS_ROOT")
    if target.startswith("win"):
        drive = fs_root or environ.get("SystemDrive", "C:") + "\\"
        return Path(drive, "hab", "sup", "default", "config")
    return Path(fs_root or "/", "hab", "sup", "default", "config")


def default_svc_config_dir(*, platform: str | None = None, env: Mapping[str, str] | None = None) -> Path:
    """Directory scanned by ``bulkload`` when no paths are given."""

    return default_config_root(platform=platform, env=env) / "svc"


def default_svc_config_file(*, platform: str | None = None, env: Mapping[str, str] | None = None) -> Path:
    """Shared default file patched into every load."""

    return default_config_root(platform=platform, env=env) / "svc.toml"


class DefaultSpecFinder:
    """Yield service config files below a set of input paths.

    Why
    ----
    Bulk results must come out in the same order on every run, so each
    directory is walked depth-first with entries sorted by name.

    What
    ----
    * An input that is a file is yielded when its suffix is ``.toml``.
    * Directories are walked recursively. Symbolic links inside a directory
      are neither followed nor yielded; only regular files count.
    * A missing input or an unreadable directory raises
      :class:`FilesystemError`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> (root / "web").mkdir()
    >>> _ = (root / "web" / "nginx.toml").write_text("", encoding="utf-8")
    >>> _ = (root / "redis.toml").write_text("", encoding="utf-8")
    >>> _ = (root / "notes.txt").write_text("", encoding="utf-8")
    >>> [Path(p).relative_to(root).as_posix() for p in DefaultSpecFinder().find([str(root)])]
    ['redis.toml', 'web/nginx.toml']
    >>> tmp.cleanup()
    """

    def find(self, paths: Sequence[str]) -> Iterator[str]:
        for raw in paths:
            root = Path(raw)
            mode = _mode(root, follow_symlinks=True)
            if stat.S_ISDIR(mode):
                yield from self._walk(root)
            elif stat.S_ISREG(mode) and _is_svc_config(root):
                yield from self._found(root)

    def _walk(self, directory: Path) -> Iterator[str]:
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise FilesystemError(str(directory), exc) from exc
        for entry in entries:
            mode = _mode(entry, follow_symlinks=False)
            if stat.S_ISDIR(mode):
                yield from self._walk(entry)
            elif stat.S_ISREG(mode) and _is_svc_config(entry):
                yield from self._found(entry)

    @staticmethod
    def _found(path: Path) -> Iterator[str]:
        log_debug("svc_config_found", source="bulk", path=str(path))
        yield str(path)


def _is_svc_config(path: Path) -> bool:
    return path.suffix == SVC_CONFIG_EXTENSION


def _mode(path: Path, *, follow_symlinks: bool) -> int:
    """Return the file mode of *path*; symlinks read as links unless followed."""

    try:
        info = path.stat() if follow_symlinks else path.lstat()
    except OSError as exc:
        raise FilesystemError(str(path), exc) from exc
    return info.st_mode
