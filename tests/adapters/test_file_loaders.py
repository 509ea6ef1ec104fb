from __future__ import annotations

from pathlib import Path

import pytest

from svc_load_config.adapters.file_loaders.structured import TOMLFileLoader, TOMLSpecLoader
from svc_load_config.domain.errors import FilesystemError, InvalidFieldValue, MalformedDocument, UnknownField
from svc_load_config.domain.fields import FIELD_NAMES
from svc_load_config.domain.provenance import ConfigSource, Provenance

COMPLETE_DOCUMENT = """\
pkg_ident = "core/redis/4.0.14"
force = true
remote_sup = "10.0.0.5:9632"
channel = "unstable"
bldr_url = "https://bldr.example.com"
group = "prod"
topology = "leader"
strategy = "rolling"
update_condition = "track-channel"
bind = ["backend:nginx.prod", "db:postgres.prod@acme"]
binding_mode = "relaxed"
health_check_interval = 10
shutdown_timeout = 20
password = "hunter2"
config_from = "/src/redis"
"""


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "redis.toml"
    path.write_text('channel = "stable"\n', encoding="utf-8")
    assert TOMLFileLoader().load(str(path)) == {"channel": "stable"}


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError) as excinfo:
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_toml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("channel = \n", encoding="utf-8")
    with pytest.raises(MalformedDocument):
        TOMLFileLoader().load(str(path))


def test_toml_loader_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.toml"
    path.write_bytes('group = "caf\xe9"\n'.encode("latin-1"))
    with pytest.raises(MalformedDocument):
        TOMLFileLoader().load(str(path))


def test_spec_loader_round_trip_marks_every_field_explicit(tmp_path: Path) -> None:
    path = tmp_path / "redis.toml"
    path.write_text(COMPLETE_DOCUMENT, encoding="utf-8")
    spec = TOMLSpecLoader().load(str(path))
    assert spec.explicit_fields() == FIELD_NAMES
    assert str(spec["pkg_ident"]) == "core/redis/4.0.14"
    assert [str(bind) for bind in spec["bind"]] == ["backend:nginx.prod", "db:postgres.prod@acme"]
    assert spec["health_check_interval"] == 10


def test_spec_loader_rejects_unknown_field(tmp_path: Path) -> None:
    path = tmp_path / "typo.toml"
    path.write_text('channel = "stable"\nchanel = "unstable"\n', encoding="utf-8")
    with pytest.raises(UnknownField) as excinfo:
        TOMLSpecLoader().load(str(path))
    assert excinfo.value.fields == ("chanel",)
    assert excinfo.value.path == str(path)


def test_spec_loader_rejects_nested_tables_for_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "nested.toml"
    path.write_text('[shared_load]\nchannel = "stable"\n', encoding="utf-8")
    with pytest.raises(UnknownField):
        TOMLSpecLoader().load(str(path))


def test_spec_loader_reports_bad_value_with_path(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text('health_check_interval = "often"\n', encoding="utf-8")
    with pytest.raises(InvalidFieldValue) as excinfo:
        TOMLSpecLoader().load(str(path))
    assert excinfo.value.path == str(path)


def test_spec_loader_uses_configured_source(tmp_path: Path) -> None:
    path = tmp_path / "svc.toml"
    path.write_text("health_check_interval = 45\n", encoding="utf-8")
    spec = TOMLSpecLoader(source=ConfigSource.BUILT_IN).load(str(path))
    assert spec.provenance("health_check_interval") is Provenance.DEFAULTED
