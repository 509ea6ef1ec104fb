"""CLI adapter for ``svc_load_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose service load resolution on the command line so operators can check
what a ``load`` or ``bulkload`` would hand to the supervisor, including which
values were set explicitly and which fell back to defaults.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_load` – resolves a single load from flags and config files.
* :func:`cli_bulkload` – resolves every service config below the given paths.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI is the outermost layer. It turns flags into a partial field set and
calls the composition root; flags the user did not pass never become explicit
fields, which is what lets config files fill them in.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click
from click.core import ParameterSource

from .adapters.env.default import startup_defaults
from .adapters.spec_finders.default import default_svc_config_dir
from .core import resolve_load, svc_loads_from_paths
from .domain.values import BindingMode, Topology, UpdateCondition, UpdateStrategy
from .generate import render_svc_config

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "svc_load_config"

#: Sources that count as "the user supplied this value".
_EXPLICIT_SOURCES: Final[frozenset[ParameterSource]] = frozenset(
    {ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT}
)

#: Load command parameters that map one-to-one onto specification fields.
_FIELD_PARAMS: Final[tuple[str, ...]] = (
    "pkg_ident",
    "force",
    "remote_sup",
    "channel",
    "bldr_url",
    "group",
    "topology",
    "strategy",
    "update_condition",
    "bind",
    "binding_mode",
    "health_check_interval",
    "shutdown_timeout",
    "password",
    "config_from",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _choices(kind: Any) -> click.Choice:
    return click.Choice([member.value for member in kind], case_sensitive=False)


@click.group(
    help="Resolve service load configuration for the supervisor",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="svc_load_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo("svc_load_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("load", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("pkg_ident", metavar="PKG_IDENT", required=False)
@click.option("-f", "--force", is_flag=True, default=False, help="Load or reload an already loaded service")
@click.option("-r", "--remote-sup", "remote_sup", help="Address of a remote supervisor (host[:port])")
@click.option("--channel", default="stable", show_default=True, help="Receive updates from this release channel")
@click.option("-u", "--url", "bldr_url", help="Alternate Builder endpoint (defaults to HAB_BLDR_URL)")
@click.option("--group", default="default", show_default=True, help="Service group with shared config and topology")
@click.option("-t", "--topology", type=_choices(Topology), help="Service topology")
@click.option("-s", "--strategy", type=_choices(UpdateStrategy), default="none", show_default=True, help="Update strategy")
@click.option(
    "--update-condition",
    type=_choices(UpdateCondition),
    default="latest",
    show_default=True,
    help="Condition dictating when this service should update",
)
@click.option("--bind", multiple=True, help="Service group to bind to (name:service.group[@org], repeatable)")
@click.option(
    "--binding-mode",
    type=_choices(BindingMode),
    default="strict",
    show_default=True,
    help="How the presence or absence of binds affects service startup",
)
@click.option(
    "-i",
    "--health-check-interval",
    type=click.IntRange(min=0),
    default=30,
    show_default=True,
    help="Interval in seconds on which to run health checks",
)
@click.option(
    "--shutdown-timeout",
    type=click.IntRange(min=0),
    help="Seconds to wait after the shutdown signal before killing the service process",
)
@click.option("--password", help="Password of the service user (Windows)")
@click.option(
    "--config-from",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    help="Use the package config from this path rather than the package itself",
)
@click.option(
    "--config-files",
    multiple=True,
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Service config files to read; earlier files win (repeatable)",
)
@click.option(
    "--default-config-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Shared default service config (defaults to /hab/sup/default/config/svc.toml)",
)
@click.option("--generate-config", is_flag=True, default=False, help="Print the resolved config as TOML and exit")
@click.option("--provenance/--no-provenance", default=False, help="Include provenance for each field")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.pass_context
def cli_load(
    ctx: click.Context,
    config_files: Sequence[Path],
    default_config_file: Optional[Path],
    generate_config: bool,
    provenance: bool,
    indent: Optional[int],
    **_fields: Any,
) -> None:
    """Resolve the configuration a service load would use and print it.

    Only flags given on the command line are explicit. Everything else comes
    from ``--config-files``, then the shared default file, then the built-in
    defaults shown in ``--help``.
    """

    spec = resolve_load(
        _explicit_fields(ctx),
        config_files=config_files,
        default_file=default_config_file,
        defaults=startup_defaults(),
    )
    if generate_config:
        click.echo(render_svc_config(spec), nl=False)
        return
    click.echo(spec.to_json(indent=indent, provenance=provenance))


@cli.command("bulkload", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--svc-config-paths",
    "svc_config_paths",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Files or directories of service config files (repeatable)",
)
@click.option(
    "--default-config-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Shared default service config (defaults to /hab/sup/default/config/svc.toml)",
)
@click.option("--provenance/--no-provenance", default=False, help="Include provenance for each field")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_bulkload(
    svc_config_paths: Sequence[Path],
    default_config_file: Optional[Path],
    provenance: bool,
    indent: Optional[int],
) -> None:
    """Resolve every service config found below the given paths.

    Paths are searched recursively for files with a ``.toml`` extension; each
    file is patched with the shared default file. When no path is given the
    well-known ``/hab/sup/default/config/svc`` directory is used, and its
    absence is not an error.
    """

    paths = list(svc_config_paths) or [default_svc_config_dir()]
    loads = svc_loads_from_paths(paths, default_file=default_config_file, defaults=startup_defaults())
    payload = [spec.as_dict(provenance=provenance) for spec in loads]
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":")))


def _explicit_fields(ctx: click.Context) -> dict[str, Any]:
    """Return load parameters whose value came from the user, not a Click default."""

    fields: dict[str, Any] = {}
    for name in _FIELD_PARAMS:
        if ctx.get_parameter_source(name) in _EXPLICIT_SOURCES:
            value = ctx.params[name]
            fields[name] = list(value) if isinstance(value, tuple) else value
    return fields


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
