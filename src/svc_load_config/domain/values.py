"""Typed values carried by Load Specification fields.

Purpose
-------
Give each field a small immutable value type with a ``parse`` constructor and
a canonical string form, so the command line and TOML documents feed the same
representation into the specification.

Contents
--------
* :class:`PackageIdent` – ``origin/name[/version[/release]]``.
* :class:`ServiceBind` – ``name:service.group[@organization]``.
* :class:`SupervisorAddress` – ``host[:port]`` of a remote supervisor.
* :class:`Topology`, :class:`UpdateStrategy`, :class:`UpdateCondition`,
  :class:`BindingMode` – closed choice sets.
* :func:`parse_url` – validates Builder endpoint URLs.

All parsers raise :class:`ValueError`; :mod:`svc_load_config.domain.fields`
turns that into :class:`~svc_load_config.domain.errors.InvalidFieldValue`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

DEFAULT_LISTEN_CTL_PORT = 9632
"""Port the supervisor control gateway listens on when none is given."""


class _Choice(str, Enum):
    """Enum whose members parse from their lower-case text value."""

    @classmethod
    def parse(cls, text: str):
        try:
            return cls(text.strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"expected one of: {allowed}") from None

    def __str__(self) -> str:
        return self.value


class Topology(_Choice):
    STANDALONE = "standalone"
    LEADER = "leader"


class UpdateStrategy(_Choice):
    NONE = "none"
    AT_ONCE = "at-once"
    ROLLING = "rolling"


class UpdateCondition(_Choice):
    """When a service should update.

    ``latest`` runs the newest package found in the channel or locally;
    ``track-channel`` always runs the head of the channel, which allows
    rollbacks when a package is demoted.
    """

    LATEST = "latest"
    TRACK_CHANNEL = "track-channel"


class BindingMode(_Choice):
    """``strict`` blocks startup until all binds are present."""

    STRICT = "strict"
    RELAXED = "relaxed"


@dataclass(frozen=True, slots=True)
class PackageIdent:
    """Fully or partially qualified package identifier.

    Examples
    --------
    >>> PackageIdent.parse("core/redis/4.0.14")
    PackageIdent(origin='core', name='redis', version='4.0.14', release=None)
    >>> str(PackageIdent.parse("core/redis"))
    'core/redis'
    >>> PackageIdent.parse("redis")
    Traceback (most recent call last):
    ...
    ValueError: expected origin/name[/version[/release]]
    """

    origin: str
    name: str
    version: str | None = None
    release: str | None = None

    @classmethod
    def parse(cls, text: str) -> PackageIdent:
        parts = text.strip().split("/")
        if not 2 <= len(parts) <= 4 or any(not part or any(ch.isspace() for ch in part) for part in parts):
            raise ValueError("expected origin/name[/version[/release]]")
        return cls(*parts)

    def __str__(self) -> str:
        return "/".join(part for part in (self.origin, self.name, self.version, self.release) if part)


@dataclass(frozen=True, slots=True)
class ServiceBind:
    """Bind descriptor mapping a bind name to a service group.

    Examples
    --------
    >>> bind = ServiceBind.parse("database:postgres.default@acme")
    >>> bind.name, bind.service, bind.group, bind.organization
    ('database', 'postgres', 'default', 'acme')
    >>> str(bind)
    'database:postgres.default@acme'
    """

    name: str
    service: str
    group: str
    organization: str | None = None

    @classmethod
    def parse(cls, text: str) -> ServiceBind:
        name, sep, service_group = text.strip().partition(":")
        if not sep or not name:
            raise ValueError("expected name:service.group[@organization]")
        group_part, at, organization = service_group.partition("@")
        service, dot, group = group_part.partition(".")
        if not dot or not service or not group or (at and not organization):
            raise ValueError("expected name:service.group[@organization]")
        return cls(name, service, group, organization or None)

    @property
    def service_group(self) -> str:
        suffix = f"@{self.organization}" if self.organization else ""
        return f"{self.service}.{self.group}{suffix}"

    def __str__(self) -> str:
        return f"{self.name}:{self.service_group}"


@dataclass(frozen=True, slots=True)
class SupervisorAddress:
    """Address of the supervisor control gateway to talk to.

    Examples
    --------
    >>> SupervisorAddress.parse("10.0.0.5")
    SupervisorAddress(host='10.0.0.5', port=9632)
    >>> str(SupervisorAddress.parse("[::1]:8000"))
    '[::1]:8000'
    """

    host: str
    port: int = DEFAULT_LISTEN_CTL_PORT

    @classmethod
    def parse(cls, text: str) -> SupervisorAddress:
        raw = text.strip()
        if raw.startswith("["):
            host, bracket, rest = raw[1:].partition("]")
            if not bracket or (rest and not rest.startswith(":")) or rest == ":":
                raise ValueError("expected host[:port]")
            port_text = rest[1:] if rest else ""
        elif raw.count(":") == 1:
            host, _, port_text = raw.partition(":")
            if not port_text:
                raise ValueError("expected host[:port]")
        else:
            host, port_text = raw, ""
        if not host:
            raise ValueError("expected host[:port]")
        if not port_text:
            return cls(host)
        if not port_text.isdigit() or not 0 < int(port_text) < 65536:
            raise ValueError(f"invalid port {port_text!r}")
        return cls(host, int(port_text))

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


def parse_url(text: str) -> str:
    """Return *text* when it is an absolute ``http``/``https`` URL.

    Examples
    --------
    >>> parse_url("https://bldr.habitat.sh")
    'https://bldr.habitat.sh'
    >>> parse_url("bldr.habitat.sh")
    Traceback (most recent call last):
    ...
    ValueError: expected an absolute http(s) URL
    """

    parts = urlsplit(text.strip())
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError("expected an absolute http(s) URL")
    return text.strip()
