"""Recognized Load Specification fields.

Purpose
-------
Declare the fixed allow-list of keys a service load understands, in canonical
order, together with the coercion rule and built-in default for each. Strict
unknown-key rejection and value validation both read from this table.

Contents
--------
* :class:`LoadDefaults` – built-in default values, passed explicitly into the
  specification builder.
* :class:`FieldSpec` – one row of the field table.
* :data:`FIELDS` / :data:`FIELD_NAMES` – the table and its key order.
* :func:`coerce_field` – validate and normalise a raw value for a field.
* :func:`unknown_fields` – keys outside the recognized set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Final, Iterable

from .errors import InvalidFieldValue
from .values import (
    BindingMode,
    PackageIdent,
    ServiceBind,
    SupervisorAddress,
    Topology,
    UpdateCondition,
    UpdateStrategy,
    parse_url,
)

DEFAULT_CHANNEL: Final[str] = "stable"
DEFAULT_GROUP: Final[str] = "default"
DEFAULT_HEALTH_CHECK_INTERVAL: Final[int] = 30


@dataclass(frozen=True, slots=True)
class LoadDefaults:
    """Built-in values used for fields nobody set.

    Why
    ----
    Some defaults are only known at start-up (``HAB_BLDR_URL``). Carrying them
    in an immutable value avoids process-wide lazily computed globals; see
    :func:`svc_load_config.adapters.env.default.startup_defaults`.
    """

    channel: str = DEFAULT_CHANNEL
    group: str = DEFAULT_GROUP
    strategy: UpdateStrategy = UpdateStrategy.NONE
    update_condition: UpdateCondition = UpdateCondition.LATEST
    binding_mode: BindingMode = BindingMode.STRICT
    health_check_interval: int = DEFAULT_HEALTH_CHECK_INTERVAL
    force: bool = False
    bldr_url: str | None = None


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Describe one recognized key.

    Attributes
    ----------
    name:
        Key used in TOML documents and partial field sets.
    coerce:
        Callable turning a raw value into the stored value; raises
        :class:`ValueError` or :class:`TypeError` on bad input.
    default:
        Callable returning the built-in default from :class:`LoadDefaults`, or
        ``None`` when the field has no default and starts unset.
    required:
        Whether resolution fails when the field is still unset at the end.
    """

    name: str
    coerce: Callable[[Any], Any]
    default: Callable[[LoadDefaults], Any] | None = None
    required: bool = False


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("expected a string")
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _seconds(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("expected an integer number of seconds")
    if value < 0:
        raise ValueError("must not be negative")
    return value


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("expected a boolean")
    return value


def _parsed(kind: Any) -> Callable[[Any], Any]:
    """Accept an instance of *kind* as-is, otherwise parse it from text."""

    def coerce(value: Any) -> Any:
        if isinstance(value, kind):
            return value
        return kind.parse(_text(value))

    return coerce


def _binds(value: Any) -> tuple[ServiceBind, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise TypeError("expected a list of bind descriptors")
    parse = _parsed(ServiceBind)
    return tuple(parse(item) for item in value)


def _url(value: Any) -> str:
    return parse_url(_text(value))


def _path(value: Any) -> Path:
    if isinstance(value, os.PathLike):
        return Path(value)
    return Path(_text(value))


FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("pkg_ident", _parsed(PackageIdent), required=True),
    FieldSpec("force", _flag, lambda d: d.force),
    FieldSpec("remote_sup", _parsed(SupervisorAddress)),
    FieldSpec("channel", _text, lambda d: d.channel),
    FieldSpec("bldr_url", _url, lambda d: d.bldr_url),
    FieldSpec("group", _text, lambda d: d.group),
    FieldSpec("topology", _parsed(Topology)),
    FieldSpec("strategy", _parsed(UpdateStrategy), lambda d: d.strategy),
    FieldSpec("update_condition", _parsed(UpdateCondition), lambda d: d.update_condition),
    FieldSpec("bind", _binds, lambda d: ()),
    FieldSpec("binding_mode", _parsed(BindingMode), lambda d: d.binding_mode),
    FieldSpec("health_check_interval", _seconds, lambda d: d.health_check_interval),
    FieldSpec("shutdown_timeout", _seconds),
    FieldSpec("password", _text),
    FieldSpec("config_from", _path),
)
"""Recognized fields in canonical order (matches generated config files)."""

FIELD_NAMES: Final[tuple[str, ...]] = tuple(spec.name for spec in FIELDS)
FIELDS_BY_NAME: Final[dict[str, FieldSpec]] = {spec.name: spec for spec in FIELDS}


def coerce_field(name: str, value: Any, *, path: str | None = None) -> Any:
    """Validate *value* for field *name* and return the stored form.

    Examples
    --------
    >>> coerce_field("health_check_interval", 10)
    10
    >>> coerce_field("strategy", "at-once")
    <UpdateStrategy.AT_ONCE: 'at-once'>
    >>> coerce_field("health_check_interval", True)
    Traceback (most recent call last):
    ...
    svc_load_config.domain.errors.InvalidFieldValue: Invalid value for 'health_check_interval': True (expected an integer number of seconds)
    """

    spec = FIELDS_BY_NAME[name]
    try:
        return spec.coerce(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFieldValue(name, value, str(exc), path=path) from exc


def unknown_fields(keys: Iterable[str]) -> list[str]:
    """Return keys that are not part of the recognized field set."""

    return [key for key in keys if key not in FIELDS_BY_NAME]
