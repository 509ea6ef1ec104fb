from __future__ import annotations

import sys
from pathlib import Path

from svc_load_config.adapters.file_loaders.structured import TOMLSpecLoader
from svc_load_config.domain.fields import FIELD_NAMES
from svc_load_config.domain.load_spec import LoadSpecification
from svc_load_config.generate import render_svc_config

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib


def _complete_spec() -> LoadSpecification:
    return LoadSpecification.from_partial(
        {
            "pkg_ident": "core/redis/4.0.14",
            "force": True,
            "remote_sup": "[::1]:9000",
            "channel": "unstable",
            "bldr_url": "https://bldr.example.com",
            "group": "prod",
            "topology": "standalone",
            "strategy": "at-once",
            "update_condition": "track-channel",
            "bind": ["backend:nginx.prod", "db:postgres.prod@acme"],
            "binding_mode": "relaxed",
            "health_check_interval": 0,
            "shutdown_timeout": 20,
            "password": 'p"a\\ss\tword',
            "config_from": "/hab/svc/redis/config",
        }
    )


def test_rendered_document_lists_every_field_in_order() -> None:
    document = tomllib.loads(render_svc_config(_complete_spec()))
    assert tuple(document) == FIELD_NAMES


def test_rendered_document_round_trips_through_loader(tmp_path: Path) -> None:
    original = _complete_spec()
    path = tmp_path / "redis.toml"
    path.write_text(render_svc_config(original), encoding="utf-8")
    reloaded = TOMLSpecLoader().load(str(path))
    assert reloaded == original
    assert reloaded.explicit_fields() == FIELD_NAMES


def test_unset_fields_are_commented_out() -> None:
    text = render_svc_config(LoadSpecification.from_partial({"pkg_ident": "core/redis"}))
    document = tomllib.loads(text)
    assert "shutdown_timeout" not in document
    assert "# shutdown_timeout =\n" in text
    assert document["health_check_interval"] == 30


def test_control_characters_survive_round_trip(tmp_path: Path) -> None:
    original = LoadSpecification.from_partial({"pkg_ident": "core/redis", "password": "pa\x7fss\x00\x1b"})
    path = tmp_path / "redis.toml"
    path.write_text(render_svc_config(original), encoding="utf-8")
    reloaded = TOMLSpecLoader().load(str(path))
    assert reloaded["password"] == "pa\x7fss\x00\x1b"
