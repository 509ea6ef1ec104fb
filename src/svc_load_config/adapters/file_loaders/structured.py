"""Service config file loaders.

Purpose
-------
Convert on-disk TOML service configs into Load Specifications. The raw loader
wraps ``tomllib`` so read errors, parse errors and observability live in one
place; the spec loader adds strict key validation on top.

Contents
--------
* :class:`BaseFileLoader` – scoped reads and mapping validation.
* :class:`TOMLFileLoader` – parses a TOML document into a mapping.
* :class:`TOMLSpecLoader` – rejects unknown keys and builds a
  :class:`~svc_load_config.domain.load_spec.LoadSpecification`.

System Role
-----------
Invoked by :mod:`svc_load_config.core` for ``--config-files``, the shared
default file and every file found in bulk mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import FilesystemError, MalformedDocument, UnknownField
from ...domain.fields import LoadDefaults, unknown_fields
from ...domain.load_spec import LoadSpecification
from ...domain.provenance import ConfigSource
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, translating ``OSError`` into :class:`FilesystemError`.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"channel = 'stable'")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:7]
        b'channel'
        >>> Path(tmp.name).unlink()
        """

        try:
            payload = Path(path).read_bytes()
        except OSError as exc:
            log_error("config_file_unreadable", source="file", path=path, error=str(exc))
            raise FilesystemError(path, exc) from exc
        log_debug("config_file_read", source="file", path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* is a mapping, otherwise raise :class:`MalformedDocument`."""

        if not isinstance(data, Mapping):
            raise MalformedDocument(path, "document did not produce a table")
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping parsed from the TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('group = "blue"')
        >>> tmp.close()
        >>> TOMLFileLoader().load(tmp.name)["group"]
        'blue'
        >>> Path(tmp.name).unlink()
        """

        raw = self._read(path)
        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            log_error("config_file_invalid", source="file", path=path, format="toml", error=str(exc))
            raise MalformedDocument(path, str(exc)) from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("config_file_loaded", source="file", path=path, format="toml", keys=len(result))
        return result


class TOMLSpecLoader:
    """Build Load Specifications from service config files.

    Why
    ----
    Keys map one-to-one to specification fields. Unknown keys are a hard error
    so a typo never silently turns into a default.

    Parameters
    ----------
    source:
        Provenance source for present keys; :attr:`ConfigSource.SPECIFIC_FILE`
        for per-service files, :attr:`ConfigSource.SHARED_DEFAULT_FILE` for
        the shared default file.
    defaults:
        Built-in defaults for keys the file does not set.
    """

    def __init__(
        self,
        *,
        source: ConfigSource = ConfigSource.SPECIFIC_FILE,
        defaults: LoadDefaults | None = None,
        documents: TOMLFileLoader | None = None,
    ) -> None:
        self.source = source
        self.defaults = defaults
        self._documents = documents or TOMLFileLoader()

    def load(self, path: str) -> LoadSpecification:
        """Return the partial specification stored at *path*.

        Raises
        ------
        FilesystemError
            The file cannot be read.
        MalformedDocument
            The content is not a TOML table.
        UnknownField
            Any key falls outside the recognized field set.
        InvalidFieldValue
            A recognized key carries a value of the wrong shape.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.toml', delete=False, encoding='utf-8')
        >>> _ = tmp.write('pkg_ident = "core/redis"\\nchannel = "unstable"\\n')
        >>> tmp.close()
        >>> spec = TOMLSpecLoader().load(tmp.name)
        >>> spec.explicit_fields()
        ('pkg_ident', 'channel')
        >>> Path(tmp.name).unlink()
        """

        document = self._documents.load(path)
        unknown = unknown_fields(document)
        if unknown:
            log_error("unknown_fields_rejected", source=self.source.value, path=path, fields=sorted(unknown))
            raise UnknownField(unknown, path=path)
        return LoadSpecification.from_partial(document, source=self.source, defaults=self.defaults, path=path)
