"""Public package surface for service load configuration resolution.

Exports the specification value objects, the patch engine, and the two
resolution flows (:func:`resolve_load` and :func:`svc_loads_from_paths`) so
``import svc_load_config`` is all a supervisor client needs.
"""

from __future__ import annotations

from .application.patch import patch, patch_chain
from .core import load_default_spec, resolve_load, svc_loads_from_paths
from .domain.errors import (
    ConfigError,
    FilesystemError,
    InvalidFieldValue,
    MalformedDocument,
    MissingRequiredField,
    UnknownField,
)
from .domain.fields import FIELD_NAMES, LoadDefaults
from .domain.load_spec import BulkLoadResult, LoadSpecification
from .domain.provenance import ConfigSource, Provenance, ProvenanceValue
from .generate import render_svc_config
from .observability import bind_trace_id, get_logger

__all__ = [
    "BulkLoadResult",
    "ConfigError",
    "ConfigSource",
    "FIELD_NAMES",
    "FilesystemError",
    "InvalidFieldValue",
    "LoadDefaults",
    "LoadSpecification",
    "MalformedDocument",
    "MissingRequiredField",
    "Provenance",
    "ProvenanceValue",
    "UnknownField",
    "bind_trace_id",
    "get_logger",
    "load_default_spec",
    "patch",
    "patch_chain",
    "render_svc_config",
    "resolve_load",
    "svc_loads_from_paths",
]
