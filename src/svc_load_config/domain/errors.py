"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the loader, the bulk resolver and the CLI.
The hierarchy lives in the domain layer so adapters may depend on it without
the domain depending on adapters.

Contents
--------
* :class:`ConfigError` – umbrella base class for every resolution failure.
* :class:`MalformedDocument` – a config file could not be parsed as TOML.
* :class:`UnknownField` – a key outside the recognized field set was found.
* :class:`FilesystemError` – traversal or read failure, carries the cause.
* :class:`MissingRequiredField` – a field without a built-in default stayed
  unset after the full patch chain.
* :class:`InvalidFieldValue` – a recognized key carried a value of the wrong
  shape.

System Role
-----------
Every failure is returned to the caller. The only tolerated absence is the
well-known default directory in bulk mode, which the composition root handles
before any of these errors can be raised.
"""

from __future__ import annotations

from typing import Iterable


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``svc_load_config``.

    Callers that do not need fine-grained handling catch this single type.
    """


class MalformedDocument(ConfigError):
    """Raised when a file's content is not a valid TOML table.

    Typical Sources
    ---------------
    :class:`svc_load_config.adapters.file_loaders.structured.TOMLFileLoader`
    when ``tomllib`` rejects the text or the bytes are not UTF-8.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid TOML in {path}: {reason}")
        self.path = path
        self.reason = reason


class UnknownField(ConfigError):
    """Raised when a document or partial field set names unrecognized keys.

    Why
    ----
    Strict rejection catches typos (``helth_check_interval``) at load time
    instead of silently falling back to a default.

    Attributes
    ----------
    fields:
        Sorted tuple of every offending key.
    path:
        Originating file, ``None`` for in-memory sources such as the CLI.
    """

    def __init__(self, fields: Iterable[str], path: str | None = None) -> None:
        self.fields = tuple(sorted(fields))
        self.path = path
        names = ", ".join(self.fields)
        where = f" in {path}" if path else ""
        super().__init__(f"Unknown field(s){where}: {names}")


class FilesystemError(ConfigError):
    """Raised when a path cannot be traversed or read.

    The underlying :class:`OSError` is available as ``cause`` and is chained
    via ``raise ... from``.
    """

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot access {path}{detail}")
        self.path = path
        self.cause = cause


class MissingRequiredField(ConfigError):
    """Raised when a required field remains unset after resolution."""

    def __init__(self, field: str, path: str | None = None) -> None:
        where = f" for {path}" if path else ""
        super().__init__(f"Missing required field '{field}'{where}")
        self.field = field
        self.path = path


class InvalidFieldValue(ConfigError):
    """Raised when a recognized field carries a value it cannot accept."""

    def __init__(self, field: str, value: object, reason: str, path: str | None = None) -> None:
        where = f" in {path}" if path else ""
        super().__init__(f"Invalid value for '{field}'{where}: {value!r} ({reason})")
        self.field = field
        self.value = value
        self.reason = reason
        self.path = path
