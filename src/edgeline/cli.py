# src/edgeline/cli.py
"""Edgeline Command Line Interface.

Entry point for the edgeline CLI tool. The CLI plays the host's role for
local runs: every input file is one split, each split gets its own reader,
and splits are read in parallel by a thread pool.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from edgeline import __version__
from edgeline.contracts import EdgeIngestError, EdgeRecord, OutputFormat, PluginNotFoundError
from edgeline.core.config import IngestSettings, load_settings
from edgeline.core.logging import get_logger, split_context
from edgeline.plugins.config_base import PluginConfigError

if TYPE_CHECKING:
    from edgeline.engine import EdgeInputFormat, InputSplit
    from edgeline.plugins.manager import PluginManager

__all__ = [
    "app",
]

logger = get_logger(__name__)

# Module-level singleton for plugin manager
_plugin_manager_cache: PluginManager | None = None


def _get_plugin_manager() -> PluginManager:
    """Get initialized plugin manager (singleton).

    Returns:
        PluginManager with all built-in codecs registered
    """
    global _plugin_manager_cache

    from edgeline.plugins.manager import PluginManager

    if _plugin_manager_cache is None:
        manager = PluginManager()
        manager.register_builtin_plugins()
        _plugin_manager_cache = manager
    return _plugin_manager_cache


app = typer.Typer(
    name="edgeline",
    help="Edgeline: typed edge ingestion for graph pipelines.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"edgeline version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # Existence is checked in _load_dotenv for a clearer message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Edgeline: typed edge ingestion for graph pipelines."""
    from edgeline.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    # Command-line logging flags win over the settings file's logging section
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _echo_validation_error(e: ValidationError) -> None:
    typer.echo("Configuration errors:", err=True)
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"])
        typer.echo(f"  - {loc}: {error['msg']}", err=True)


def _resolve_settings(settings_path: Path | None, overrides: dict[str, Any]) -> IngestSettings:
    """Load the settings file (if any) and apply command-line overrides.

    Raises:
        typer.Exit: If the file is missing or the result is invalid
    """
    try:
        base = load_settings(settings_path) if settings_path is not None else IngestSettings()
        if not overrides:
            return base
        return IngestSettings(**{**base.model_dump(), **overrides})
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings_path}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings_path}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        _echo_validation_error(e)
        raise typer.Exit(1) from None


def _apply_logging_settings(ctx: typer.Context, settings: IngestSettings) -> None:
    from edgeline.core.logging import configure_logging

    flags = ctx.obj or {}
    configure_logging(
        json_output=flags.get("json_logs") or settings.logging.json_output,
        level="DEBUG" if flags.get("verbose") else settings.logging.level,
    )


def _build_input_format(settings: IngestSettings) -> EdgeInputFormat:
    from edgeline.engine import EdgeInputFormat

    try:
        return EdgeInputFormat.for_codec(settings.codec, settings.codec_options, _get_plugin_manager())
    except (PluginNotFoundError, PluginConfigError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None


def _read_split(input_format: EdgeInputFormat, split: InputSplit, conf: dict[str, str]) -> list[EdgeRecord]:
    """Read one split to completion on a worker thread."""
    with split_context(split.uri):
        edges = list(input_format.read_split(split, conf))
        logger.info("split_ingested", edges=len(edges))
    return edges


def _format_edge(edge: EdgeRecord, output_format: OutputFormat) -> str:
    if output_format == OutputFormat.JSONL:
        return json.dumps({"source": edge.source, "target": edge.target, "value": edge.value})
    value = "" if edge.value is None else str(edge.value)
    return f"{edge.source}\t{edge.target}\t{value}"


def _write_edges(edges: list[EdgeRecord], output_format: OutputFormat, out: TextIO | None) -> None:
    for edge in edges:
        line = _format_edge(edge, output_format)
        if out is None:
            typer.echo(line)
        else:
            out.write(line + "\n")


@app.command()
def ingest(
    ctx: typer.Context,
    inputs: list[Path] | None = typer.Argument(
        None,
        help="Input files, one split each. Overrides 'inputs' from the settings file.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    codec: str | None = typer.Option(
        None,
        "--codec",
        "-c",
        help="Edge value codec (see 'edgeline codecs').",
    ),
    delimiter: str | None = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="Field delimiter.",
    ),
    default_value: str | None = typer.Option(
        None,
        "--default-value",
        help="Edge value for lines without a third field.",
    ),
    reverse_duplicate: bool | None = typer.Option(
        None,
        "--reverse-duplicate/--no-reverse-duplicate",
        help="Emit every edge in both directions (undirected input).",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Splits read in parallel.",
    ),
    output_format: OutputFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: 'tsv' or 'jsonl'.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write edges to this file instead of stdout.",
    ),
) -> None:
    """Read input files into typed edges.

    Any malformed or invalid line fails the whole run; nothing is skipped.
    """
    from edgeline.engine import FileSplit

    overrides: dict[str, Any] = {
        key: value
        for key, value in {
            "codec": codec,
            "delimiter": delimiter,
            "default_value": default_value,
            "reverse_duplicate": reverse_duplicate,
            "workers": workers,
            "output_format": output_format,
        }.items()
        if value is not None
    }
    if inputs:
        overrides["inputs"] = [str(path) for path in inputs]

    config = _resolve_settings(settings, overrides)
    _apply_logging_settings(ctx, config)
    if not config.inputs:
        typer.echo("Error: No input files. Pass files as arguments or set 'inputs' in the settings file.", err=True)
        raise typer.Exit(1)

    input_format = _build_input_format(config)
    conf = config.to_job_conf()
    splits = [FileSplit(path) for path in config.inputs]

    out = open(output, "w", encoding="utf-8") if output is not None else None  # noqa: SIM115 - closed below
    total = 0
    try:
        with ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="edgeline-split") as pool:
            futures = [pool.submit(_read_split, input_format, split, conf) for split in splits]
            try:
                # Results are written in input order regardless of completion order
                for future in futures:
                    edges = future.result()
                    _write_edges(edges, config.output_format, out)
                    total += len(edges)
            except EdgeIngestError:
                # Splits not yet started are abandoned
                for future in futures:
                    future.cancel()
                raise
    except EdgeIngestError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None
    finally:
        if out is not None:
            out.close()

    logger.info("ingest_complete", splits=len(splits), edges=total, codec=config.codec)


@dataclass(frozen=True)
class CodecInfo:
    """Metadata for a registered codec.

    Attributes:
        name: The codec identifier used in settings and on the command line.
        default_value: Raw value substituted for a missing third field.
        description: Human-readable description of the codec's purpose.
    """

    name: str
    default_value: str
    description: str


def _build_codec_registry() -> list[CodecInfo]:
    """Describe every registered codec, sorted by name."""
    from edgeline.plugins.discovery import describe_codec

    manager = _get_plugin_manager()
    return [
        CodecInfo(
            name=cls.name,
            default_value=cls().default_edge_value(),
            description=describe_codec(cls),
        )
        for cls in manager.get_codecs()
    ]


@app.command()
def codecs() -> None:
    """List available edge value codecs."""
    registry = _build_codec_registry()
    if not registry:
        typer.echo("  (none available)")
        return
    for info in registry:
        typer.echo(f"  {info.name:10} default={info.default_value!r:8} - {info.description}")


@app.command()
def validate(
    settings: Path = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate a settings file without reading any edges."""
    config = _resolve_settings(settings, {})
    _build_input_format(config)

    missing = [path for path in config.inputs if not Path(path).is_file()]
    if missing:
        for path in missing:
            typer.echo(f"Error: Input file not found: {path}", err=True)
        raise typer.Exit(1)

    typer.echo("Settings valid.")
    typer.echo(f"  Codec: {config.codec}")
    typer.echo(f"  Inputs: {len(config.inputs)}")
    typer.echo(f"  Reverse duplicate: {config.reverse_duplicate}")
