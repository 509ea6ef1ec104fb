"""Service config document generation.

Purpose
-------
Render a Load Specification as the TOML document ``bulkload`` and
``--config-files`` understand, so operators can capture a ``load`` invocation
once and replay it from a directory later.

Contents
    - ``render_svc_config``: public entry point returning the TOML text.
    - ``_render_line``: one ``tomli_w`` line per set field, a commented key
      otherwise.

System Role
-----------
Backs ``svc-load-config load --generate-config``. Output is accepted by
:class:`svc_load_config.adapters.file_loaders.structured.TOMLSpecLoader`.
"""

from __future__ import annotations

from typing import Any

import tomli_w

from .domain.load_spec import LoadSpecification

_HEADER = "# Service load configuration generated by svc-load-config\n"


def render_svc_config(spec: LoadSpecification) -> str:
    """Return *spec* as a service config TOML document.

    Set fields are serialised with ``tomli_w`` one key at a time so the canonical
    field order is kept. Unset fields are written as commented-out keys so the
    file still documents every recognized setting.

    Examples
    --------
    >>> spec = LoadSpecification.from_partial({"pkg_ident": "core/redis", "shutdown_timeout": 20})
    >>> text = render_svc_config(spec)
    >>> 'pkg_ident = "core/redis"' in text, "shutdown_timeout = 20" in text
    (True, True)
    >>> "# topology =" in text
    True
    """

    exported = spec.as_dict()
    lines = [_HEADER]
    lines.extend(_render_line(name, value) for name, value in exported.items())
    return "\n".join(lines) + "\n"


def _render_line(name: str, value: Any) -> str:
    if value is None:
        return f"# {name} ="
    return tomli_w.dumps({name: value}).rstrip("\n")
