"""Composition root for ``svc_load_config``.

Purpose
-------
Provide the entry points that wire the TOML loader, the spec finder and the
patch engine into the two resolution flows: a single ``load`` driven by the
command line, and ``bulkload`` driven by directories of service configs.

Contents
--------
* :func:`load_default_spec` – the shared default specification.
* :func:`resolve_load` – single-load resolution (CLI > config files > shared
  default file > built-in).
* :func:`svc_loads_from_paths` – bulk directory resolution.

System Role
-----------
Resolved specifications leave this module immutable and complete, ready for
the supervisor client. Every failure propagates; the only tolerated absence is
the well-known bulk directory when it is the sole requested path.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from .adapters.file_loaders.structured import TOMLSpecLoader
from .adapters.spec_finders.default import DefaultSpecFinder, default_svc_config_dir, default_svc_config_file
from .application.patch import patch
from .application.ports import SpecFinder, SpecLoader
from .domain.errors import (
    ConfigError,
    FilesystemError,
    InvalidFieldValue,
    MalformedDocument,
    MissingRequiredField,
    UnknownField,
)
from .domain.fields import LoadDefaults
from .domain.load_spec import BulkLoadResult, LoadSpecification
from .domain.provenance import ConfigSource
from .observability import bind_trace_id, log_debug, log_info, make_event

PathLike = str | os.PathLike[str]


def load_default_spec(
    path: PathLike | None = None,
    *,
    defaults: LoadDefaults | None = None,
    loader: SpecLoader | None = None,
) -> LoadSpecification:
    """Return the shared default specification.

    Why
    ----
    Values in ``svc.toml`` are explicit in that file but only fill gaps of the
    more specific sources they are patched into.

    What
    ----
    Loads *path* (the well-known default file when omitted) when it exists,
    otherwise returns :meth:`LoadSpecification.new_with_defaults`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> spec = load_default_spec(Path(tmp.name) / "svc.toml")
    >>> spec.explicit_fields(), spec["health_check_interval"]
    ((), 30)
    >>> tmp.cleanup()
    """

    target = Path(path) if path is not None else default_svc_config_file()
    if not target.exists():
        log_debug("default_spec_missing", **make_event(ConfigSource.SHARED_DEFAULT_FILE.value, str(target)))
        return LoadSpecification.new_with_defaults(defaults)
    spec_loader = loader or TOMLSpecLoader(source=ConfigSource.SHARED_DEFAULT_FILE, defaults=defaults)
    spec = spec_loader.load(str(target))
    log_debug(
        "default_spec_loaded",
        **make_event(ConfigSource.SHARED_DEFAULT_FILE.value, str(target), {"explicit": len(spec.explicit_fields())}),
    )
    return spec


def resolve_load(
    cli_fields: Mapping[str, Any],
    *,
    config_files: Iterable[PathLike] = (),
    default_file: PathLike | None = None,
    defaults: LoadDefaults | None = None,
) -> LoadSpecification:
    """Resolve the specification for a single ``load`` invocation.

    Parameters
    ----------
    cli_fields:
        Fields the user passed on the command line (only those; absent flags
        must not appear). They form the highest-precedence base.
    config_files:
        Extra service config files. Earlier files take precedence over later
        ones; all of them lose against the command line.
    default_file:
        Shared default file; the well-known ``svc.toml`` when omitted.
    defaults:
        Built-in defaults, usually from
        :func:`svc_load_config.adapters.env.default.startup_defaults`.

    Raises
    ------
    ConfigError
        Any loader failure, or :class:`MissingRequiredField` when
        ``pkg_ident`` is still unset at the end.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> spec = resolve_load({"pkg_ident": "core/redis", "shutdown_timeout": 20},
    ...                     default_file=Path(tmp.name) / "svc.toml")
    >>> spec["shutdown_timeout"], spec.provenance("shutdown_timeout").value
    (20, 'explicit')
    >>> tmp.cleanup()
    """

    bind_trace_id(None)
    resolved = LoadSpecification.from_partial(cli_fields, source=ConfigSource.COMMAND_LINE, defaults=defaults)
    file_loader = TOMLSpecLoader(source=ConfigSource.SPECIFIC_FILE, defaults=defaults)
    for config_file in config_files:
        resolved = patch(resolved, file_loader.load(str(config_file)))
    resolved = patch(resolved, load_default_spec(default_file, defaults=defaults))
    resolved.ensure_complete()
    log_info(
        "load_resolved",
        **make_event(ConfigSource.COMMAND_LINE.value, None, {"pkg_ident": str(resolved["pkg_ident"])}),
    )
    return resolved


def svc_loads_from_paths(
    paths: Sequence[PathLike] | None = None,
    *,
    default_dir: PathLike | None = None,
    default_file: PathLike | None = None,
    defaults: LoadDefaults | None = None,
    finder: SpecFinder | None = None,
    loader: SpecLoader | None = None,
) -> BulkLoadResult:
    """Resolve every service config found below *paths*.

    Why
    ----
    ``bulkload`` lets operators drop one file per service into a directory
    tree instead of issuing one ``load`` per service.

    What
    ----
    1. When *paths* is exactly ``[default_dir]`` and it does not exist, return
       ``[]``; this lets the supervisor start without anyone creating it.
    2. Load the shared default specification once.
    3. Find every ``.toml`` file below each path, in traversal order.
    4. Patch each file's specification (the base) with the shared default.
    5. Require ``pkg_ident`` on each result.

    Any error aborts the whole operation and no partial result is returned.

    Parameters
    ----------
    paths:
        Files or directories to scan; defaults to ``[default_dir]``.
    default_dir:
        Well-known scan root; ``/hab/sup/default/config/svc`` when omitted.
    default_file:
        Shared default file; ``/hab/sup/default/config/svc.toml`` when omitted.
    """

    bind_trace_id(None)
    well_known = Path(default_dir) if default_dir is not None else default_svc_config_dir()
    requested = [Path(path) for path in paths] if paths is not None else [well_known]
    if requested == [well_known] and not well_known.exists():
        log_info("bulk_load_skipped", **make_event("bulk", str(well_known), {"reason": "default path missing"}))
        return []

    default_spec = load_default_spec(default_file, defaults=defaults)
    spec_finder = finder or DefaultSpecFinder()
    spec_loader = loader or TOMLSpecLoader(source=ConfigSource.SPECIFIC_FILE, defaults=defaults)

    results: BulkLoadResult = []
    for found in spec_finder.find([str(path) for path in requested]):
        resolved = patch(spec_loader.load(found), default_spec)
        results.append(resolved.ensure_complete(path=found))
    log_info("bulk_load_resolved", **make_event("bulk", None, {"paths": len(requested), "loads": len(results)}))
    return results


__all__ = [
    "ConfigError",
    "FilesystemError",
    "InvalidFieldValue",
    "MalformedDocument",
    "MissingRequiredField",
    "UnknownField",
    "load_default_spec",
    "resolve_load",
    "svc_loads_from_paths",
]
