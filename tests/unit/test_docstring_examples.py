"""Run the examples embedded in module docstrings."""

from __future__ import annotations

import doctest
import importlib

import pytest

MODULES = (
    "svc_load_config.domain.provenance",
    "svc_load_config.domain.values",
    "svc_load_config.domain.fields",
    "svc_load_config.domain.load_spec",
    "svc_load_config.application.patch",
    "svc_load_config.observability",
    "svc_load_config.adapters.file_loaders.structured",
    "svc_load_config.adapters.spec_finders.default",
    "svc_load_config.adapters.env.default",
    "svc_load_config.core",
    "svc_load_config.generate",
)


@pytest.mark.parametrize("name", MODULES)
def test_docstring_examples(name: str) -> None:
    module = importlib.import_module(name)
    failures, _ = doctest.testmod(module, verbose=False)
    assert failures == 0
