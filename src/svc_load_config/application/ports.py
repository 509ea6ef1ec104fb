"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so file
parsing and directory traversal stay swappable (tests, alternative layouts).

Contents
--------
* :class:`SpecLoader` – turns one config file into a partial specification.
* :class:`SpecFinder` – enumerates config files below a set of paths.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, runtime_checkable

from ..domain.load_spec import LoadSpecification


@runtime_checkable
class SpecLoader(Protocol):
    """Parse a service config file into a :class:`LoadSpecification`.

    Implementations reject unknown keys and never touch the filesystem beyond
    the single read of *path*.
    """

    def load(self, path: str) -> LoadSpecification:
        """Read *path*; raise ``MalformedDocument``, ``UnknownField`` or ``FilesystemError`` on failure."""


@runtime_checkable
class SpecFinder(Protocol):
    """Discover service config files.

    Why
    ----
    Keep traversal order and file filtering out of the bulk resolver so the
    ordering guarantee lives in one place.
    """

    def find(self, paths: Sequence[str]) -> Iterable[str]:
        """Yield config file paths in traversal order; raise ``FilesystemError`` on access failures."""
