"""Provenance-tagged values.

Purpose
-------
Distinguish values somebody supplied (command line, a config file) from values
that only exist because a default was inserted. The tag is the sole input the
patch engine consults when deciding which side of a merge wins.

Contents
--------
* :class:`Provenance` – two-state tag (``explicit`` / ``defaulted``).
* :class:`ConfigSource` – where a freshly built specification came from.
* :class:`ProvenanceValue` – immutable ``(value, provenance)`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Provenance(str, Enum):
    """Whether a field value was supplied or derived from a default."""

    EXPLICIT = "explicit"
    DEFAULTED = "defaulted"


class ConfigSource(str, Enum):
    """Origin of a partial field set at construction time.

    Why
    ----
    Only the initial tag depends on the source: built-in constants are
    ``defaulted`` and everything a user wrote down is ``explicit``. The source
    itself is not retained on the resulting specification.

    Examples
    --------
    >>> ConfigSource.SHARED_DEFAULT_FILE.provenance
    <Provenance.EXPLICIT: 'explicit'>
    >>> ConfigSource.BUILT_IN.provenance
    <Provenance.DEFAULTED: 'defaulted'>
    """

    COMMAND_LINE = "command-line"
    SPECIFIC_FILE = "specific-file"
    SHARED_DEFAULT_FILE = "shared-default-file"
    BUILT_IN = "built-in"

    @property
    def provenance(self) -> Provenance:
        if self is ConfigSource.BUILT_IN:
            return Provenance.DEFAULTED
        return Provenance.EXPLICIT


@dataclass(frozen=True, slots=True)
class ProvenanceValue(Generic[T]):
    """Wrap *value* with the provenance tag that governs merge precedence.

    Examples
    --------
    >>> ProvenanceValue.explicit(20).is_explicit
    True
    >>> ProvenanceValue.defaulted(30)
    ProvenanceValue(value=30, provenance=<Provenance.DEFAULTED: 'defaulted'>)
    """

    value: T
    provenance: Provenance

    @classmethod
    def explicit(cls, value: T) -> ProvenanceValue[T]:
        return cls(value, Provenance.EXPLICIT)

    @classmethod
    def defaulted(cls, value: T) -> ProvenanceValue[T]:
        return cls(value, Provenance.DEFAULTED)

    @property
    def is_explicit(self) -> bool:
        return self.provenance is Provenance.EXPLICIT
