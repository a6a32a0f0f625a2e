# src/nodecompat/cli.py
"""nodecompat Command Line Interface.

Entry point for the nodecompat CLI tool.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from nodecompat import __version__
from nodecompat.analysis import (
    build_compatibility_matrix,
    get_compatibility_score,
    get_recommended_connections,
    is_compatible,
)
from nodecompat.contracts import CatalogError, CompatibilityMatrix, NodeConnectionInfo, is_ai_connection
from nodecompat.core.catalog import load_node_catalog, save_matrix
from nodecompat.core.config import NodeCompatSettings, load_settings
from nodecompat.core.logging import get_logger
from nodecompat.rendering import generate_compatibility_matrix, generate_node_connection_guide

__all__ = [
    "app",
]

logger = get_logger(__name__)

app = typer.Typer(
    name="nodecompat",
    help="nodecompat: n8n node connection compatibility guides.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nodecompat version {__version__}")
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
    """nodecompat: n8n node connection compatibility guides."""
    from nodecompat.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(json_output=json_logs, level=log_level)

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_validation_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]❌ {title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _load_config(settings: str | None) -> NodeCompatSettings:
    """Load settings file, or defaults when none is given."""
    if settings is None:
        return NodeCompatSettings()

    settings_path = Path(settings).expanduser()
    try:
        return load_settings(settings_path)
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_validation_error(
            title="Configuration Validation Failed",
            message=f"Invalid settings in {settings_path.name}",
            details=details,
            hint="Check field names, types, and required values.",
        )
        raise typer.Exit(1) from None


def _load_nodes(nodes: str | None, config: NodeCompatSettings) -> list[NodeConnectionInfo]:
    """Load the node catalog named on the command line or in settings."""
    if nodes is not None:
        nodes_path = Path(nodes).expanduser()
    elif config.nodes_file is not None:
        nodes_path = config.nodes_file
    else:
        _format_validation_error(
            title="No Node Catalog",
            message="No node catalog was given.",
            hint="Pass --nodes FILE or set nodes_file in the settings file.",
        )
        raise typer.Exit(1)

    try:
        return load_node_catalog(nodes_path)
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Node catalog does not exist: {nodes_path}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except CatalogError as e:
        _format_validation_error(
            title="Invalid Node Catalog",
            message=str(e),
            hint="Each record needs nodeType and displayName plus inputTypes/outputTypes or an n8n description.",
        )
        raise typer.Exit(1) from None


def _load(nodes: str | None, settings: str | None) -> tuple[NodeCompatSettings, list[NodeConnectionInfo], CompatibilityMatrix]:
    config = _load_config(settings)
    node_list = _load_nodes(nodes, config)
    return config, node_list, build_compatibility_matrix(node_list)


def _find_node(node_type: str, node_list: list[NodeConnectionInfo]) -> NodeConnectionInfo:
    for node in node_list:
        if node.node_type == node_type:
            return node

    import difflib

    suggestions = difflib.get_close_matches(node_type, [n.node_type for n in node_list], n=3, cutoff=0.6)
    _format_validation_error(
        title="Unknown Node",
        message=f"Node type '{node_type}' is not in the catalog.",
        details=[f"Did you mean '{s}'?" for s in suggestions] or None,
    )
    raise typer.Exit(1)


def _guide_filename(node_type: str) -> str:
    """File name for a node guide ("@n8n/n8n-nodes-langchain.agent" -> "n8n-n8n-nodes-langchain.agent.md")."""
    safe = "".join(ch if ch.isalnum() or ch in "._-" else "-" for ch in node_type).strip("-")
    return f"{safe or 'node'}.md"


def _guide_filenames(node_types: list[str]) -> list[str]:
    """Guide file names in node order; colliding names get a numeric suffix ("a-b-2.md")."""
    used: set[str] = set()
    names: list[str] = []
    for node_type in node_types:
        name = _guide_filename(node_type)
        stem = name.removesuffix(".md")
        counter = 2
        while name in used:
            name = f"{stem}-{counter}.md"
            counter += 1
        if counter > 2:
            logger.warning("guide_filename_collision", node_type=node_type, filename=name)
        used.add(name)
        names.append(name)
    return names


NODES_OPTION_HELP = "Node catalog (JSON or YAML). Defaults to nodes_file from settings."
SETTINGS_OPTION_HELP = "Path to settings YAML file."


@app.command()
def build(
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Output directory (overrides settings)."),
    top_n: int | None = typer.Option(None, "--top-n", min=0, help="Nodes included in the matrix table."),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Entries per guide list."),
) -> None:
    """Build the compatibility matrix and write the matrix cache, table, and guides."""
    config, node_list, matrix = _load(nodes, settings)

    output_dir = Path(output).expanduser() if output is not None else config.output.directory
    matrix_top_n = top_n if top_n is not None else config.render.matrix_top_n
    guide_limit = limit if limit is not None else config.render.guide_limit

    save_matrix(matrix, output_dir / config.output.matrix_json)

    matrix_path = output_dir / config.output.matrix_markdown
    matrix_path.parent.mkdir(parents=True, exist_ok=True)
    matrix_path.write_text(generate_compatibility_matrix(matrix, node_list, matrix_top_n), encoding="utf-8")

    guides_dir = output_dir / config.output.guides_subdir
    guides_dir.mkdir(parents=True, exist_ok=True)
    filenames = _guide_filenames([n.node_type for n in node_list])
    for node, filename in zip(node_list, filenames, strict=True):
        guide = generate_node_connection_guide(node, matrix, node_list, guide_limit)
        (guides_dir / filename).write_text(guide, encoding="utf-8")

    compatible_pairs = sum(len(row.compatible) for row in matrix.values())
    logger.info("build_completed", output=str(output_dir), node_count=len(node_list))

    typer.echo("✅ Compatibility build complete")
    typer.echo(f"  Nodes: {len(node_list)}")
    typer.echo(f"  Compatible pairs: {compatible_pairs}")
    typer.echo(f"  Matrix: {matrix_path}")
    typer.echo(f"  Guides: {guides_dir} ({len(node_list)} files)")


@app.command()
def guide(
    node_type: str = typer.Argument(..., help="Node type to document (e.g. nodes-base.slack)."),
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Entries per list."),
) -> None:
    """Print the connection guide for one node."""
    config, node_list, matrix = _load(nodes, settings)
    node = _find_node(node_type, node_list)
    guide_limit = limit if limit is not None else config.render.guide_limit
    typer.echo(generate_node_connection_guide(node, matrix, node_list, guide_limit))


@app.command()
def matrix(
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
    top_n: int | None = typer.Option(None, "--top-n", min=0, help="Nodes included in the table."),
) -> None:
    """Print the compatibility matrix table."""
    config, node_list, built = _load(nodes, settings)
    matrix_top_n = top_n if top_n is not None else config.render.matrix_top_n
    typer.echo(generate_compatibility_matrix(built, node_list, matrix_top_n))


@app.command()
def check(
    source: str = typer.Argument(..., help="Source node type."),
    target: str = typer.Argument(..., help="Target node type."),
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Show whether SOURCE can connect to TARGET and the score."""
    _, _, built = _load(nodes, settings)
    compatible = is_compatible(source, target, built)
    score = get_compatibility_score(source, target, built)

    row = built.get(source)
    entry = row.find(target) if row is not None else None

    if json_output:
        import json

        typer.echo(
            json.dumps(
                {
                    "source": source,
                    "target": target,
                    "compatible": compatible,
                    "score": score,
                    "connection_types": list(entry.connection_types) if entry else [],
                    "reason": entry.reason if entry else None,
                }
            )
        )
        return

    symbol = "✓" if compatible else "✗"
    typer.echo(f"{symbol} {source} → {target}: score {score}")
    if entry is not None:
        typer.echo(f"  Reason: {entry.reason}")


@app.command()
def recommend(
    node_type: str = typer.Argument(..., help="Source node type."),
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Number of recommendations."),
) -> None:
    """List the highest scoring targets for a node."""
    config, node_list, built = _load(nodes, settings)
    node = _find_node(node_type, node_list)
    count = limit if limit is not None else config.render.recommend_limit

    names = {n.node_type: n.display_name for n in node_list}
    recommended = get_recommended_connections(node.node_type, built, count)
    if not recommended:
        typer.echo(f"No compatible targets for {node.display_name}.")
        return

    typer.echo(f"Recommended connections for {node.display_name}:")
    for index, entry in enumerate(recommended, start=1):
        typer.echo(f"  {index}. {names.get(entry.target_node, entry.target_node)} (score: {entry.score})")
        typer.echo(f"     Reason: {entry.reason}")


@app.command()
def validate(
    nodes: str | None = typer.Option(None, "--nodes", "-n", help=NODES_OPTION_HELP),
    settings: str | None = typer.Option(None, "--settings", "-s", help=SETTINGS_OPTION_HELP),
) -> None:
    """Validate a node catalog without writing anything."""
    config = _load_config(settings)
    node_list = _load_nodes(nodes, config)

    flagged = [
        n.node_type for n in node_list if n.requires_special_inputs and not any(is_ai_connection(t) for t in n.input_types)
    ]
    triggers = sum(1 for n in node_list if not n.input_types)

    typer.echo("✅ Node catalog valid!")
    typer.echo(f"  Nodes: {len(node_list)}")
    typer.echo(f"  Without inputs (triggers/start nodes): {triggers}")
    typer.echo(f"  Requiring special inputs: {sum(1 for n in node_list if n.requires_special_inputs)}")
    if flagged:
        typer.secho(
            f"  ⚠ Flagged as requiring special inputs but declaring no ai_ input: {', '.join(flagged)}",
            fg=typer.colors.YELLOW,
        )
