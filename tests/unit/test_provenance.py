from __future__ import annotations

import dataclasses

import pytest

from svc_load_config.domain.provenance import ConfigSource, Provenance, ProvenanceValue


def test_explicit_and_defaulted_constructors() -> None:
    assert ProvenanceValue.explicit(20) == ProvenanceValue(20, Provenance.EXPLICIT)
    assert ProvenanceValue.defaulted(30).provenance is Provenance.DEFAULTED
    assert ProvenanceValue.explicit("stable").is_explicit
    assert not ProvenanceValue.defaulted("stable").is_explicit


def test_provenance_value_is_immutable() -> None:
    value = ProvenanceValue.explicit(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        value.value = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        (ConfigSource.COMMAND_LINE, Provenance.EXPLICIT),
        (ConfigSource.SPECIFIC_FILE, Provenance.EXPLICIT),
        (ConfigSource.SHARED_DEFAULT_FILE, Provenance.EXPLICIT),
        (ConfigSource.BUILT_IN, Provenance.DEFAULTED),
    ],
)
def test_config_source_sets_initial_provenance(source: ConfigSource, expected: Provenance) -> None:
    assert source.provenance is expected
