"""Application-layer patch policy.

Purpose
-------
Combine two Load Specifications so that explicit values always survive,
whatever order defaults are discovered in. Free of I/O so alternative
composition roots can reuse it.

Contents
    - ``patch``: fill the gaps of a higher-precedence base from an overlay.
    - ``patch_chain``: fold a highest-first sequence of specifications.
    - ``_patch_entry``: the per-field rule table.

System Role
-----------
Called by :mod:`svc_load_config.core` with the more specific specification as
the base (command line over ``--config-files`` over the shared default file
over built-in constants).
"""

from __future__ import annotations

from typing import Iterable

from ..domain.load_spec import Entry, LoadSpecification
from ..observability import log_debug


def patch(base: LoadSpecification, overlay: LoadSpecification) -> LoadSpecification:
    """Return *base* with its defaulted or unset fields filled from *overlay*.

    Rules per field
    ---------------
    * base explicit → base kept, whatever the overlay holds.
    * base defaulted/unset, overlay explicit → overlay value, explicit.
    * base defaulted, overlay defaulted → base kept.
    * base unset, overlay defaulted → overlay's default fills the gap.
    * both unset → unset.

    The operation is deliberately non-commutative: the base wins whenever both
    sides are explicit. ``patch(a, patch(a, b)) == patch(a, b)`` holds for any
    pair.

    Examples
    --------
    >>> from svc_load_config.domain.provenance import ConfigSource
    >>> svc = LoadSpecification.from_partial({"channel": "unstable"}, source=ConfigSource.SPECIFIC_FILE)
    >>> shared = LoadSpecification.from_partial(
    ...     {"channel": "stable", "health_check_interval": 10}, source=ConfigSource.SHARED_DEFAULT_FILE
    ... )
    >>> merged = patch(svc, shared)
    >>> merged["channel"], merged["health_check_interval"], merged.provenance("health_check_interval").value
    ('unstable', 10, 'explicit')
    """

    entries: dict[str, Entry] = {}
    filled = 0
    for name in base:
        current = base.entry(name)
        chosen = _patch_entry(current, overlay.entry(name))
        if chosen is not current:
            filled += 1
        entries[name] = chosen
    if filled:
        log_debug("spec_patched", filled=filled)
    return LoadSpecification(entries)


def patch_chain(specs: Iterable[LoadSpecification]) -> LoadSpecification:
    """Patch a sequence ordered from highest to lowest precedence.

    Raises :class:`ValueError` when *specs* is empty.
    """

    iterator = iter(specs)
    try:
        resolved = next(iterator)
    except StopIteration:
        raise ValueError("patch_chain requires at least one specification") from None
    for overlay in iterator:
        resolved = patch(resolved, overlay)
    return resolved


def _patch_entry(base: Entry, overlay: Entry) -> Entry:
    """Pick the surviving entry for a single field."""

    if base is not None and base.is_explicit:
        return base
    if overlay is None:
        return base
    if overlay.is_explicit or base is None:
        return overlay
    return base
