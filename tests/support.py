"""Shared sandbox for tests that need a supervisor-style config tree.

The layout mirrors the well-known locations below a temporary root:

* ``<root>/hab/sup/default/config/svc.toml`` – shared default file.
* ``<root>/hab/sup/default/config/svc/`` – bulk scan directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent

import pytest

from svc_load_config.adapters.spec_finders.default import default_svc_config_dir, default_svc_config_file


@dataclass(slots=True)
class SvcConfigSandbox:
    root: Path
    default_dir: Path
    default_file: Path

    @property
    def env(self) -> dict[str, str]:
        """Environment that points the well-known paths into the sandbox."""

        return {"FS_ROOT": str(self.root)}

    def apply_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key, value in self.env.items():
            monkeypatch.setenv(key, value)
        monkeypatch.delenv("HAB_BLDR_URL", raising=False)

    def write_default(self, body: str) -> Path:
        return _write(self.default_file, body)

    def write_svc(self, relative: str, body: str) -> Path:
        return _write(self.default_dir / relative, body)


def create_svc_sandbox(tmp_path: Path) -> SvcConfigSandbox:
    env = {"FS_ROOT": str(tmp_path)}
    return SvcConfigSandbox(
        root=tmp_path,
        default_dir=default_svc_config_dir(platform="linux", env=env),
        default_file=default_svc_config_file(platform="linux", env=env),
    )


def _write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(body).lstrip(), encoding="utf-8")
    return path
