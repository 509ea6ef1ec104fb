"""Start-up defaults sourced from the process environment.

Purpose
-------
Compute the :class:`~svc_load_config.domain.fields.LoadDefaults` value once
at start-up so environment-dependent defaults (the Builder URL) reach the
specification builder as ordinary arguments.

Contents
--------
* :data:`BLDR_URL_ENV_VAR` – environment variable holding the Builder URL.
* :func:`startup_defaults` – build defaults from an environment mapping.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...domain.errors import InvalidFieldValue
from ...domain.fields import LoadDefaults
from ...domain.values import parse_url
from ...observability import log_debug

BLDR_URL_ENV_VAR = "HAB_BLDR_URL"


def startup_defaults(env: Mapping[str, str] | None = None) -> LoadDefaults:
    """Return built-in defaults, with ``HAB_BLDR_URL`` as the defaulted ``bldr_url``.

    Why
    ----
    A Builder URL taken from the environment is a fallback, not something the
    user passed for this load, so it must stay ``defaulted`` and lose against
    any file that sets ``bldr_url``.

    Examples
    --------
    >>> startup_defaults({}).bldr_url is None
    True
    >>> startup_defaults({"HAB_BLDR_URL": "https://bldr.example.com"}).bldr_url
    'https://bldr.example.com'
    """

    environ = os.environ if env is None else env
    raw = environ.get(BLDR_URL_ENV_VAR, "").strip()
    if not raw:
        return LoadDefaults()
    try:
        url = parse_url(raw)
    except ValueError as exc:
        raise InvalidFieldValue("bldr_url", raw, f"{BLDR_URL_ENV_VAR}: {exc}") from exc
    log_debug("startup_default_applied", source="env", path=None, field="bldr_url")
    return LoadDefaults(bldr_url=url)
