"""CLI for remote-graphql-check."""

import logging
from typing import Optional

import typer
from graphql import GraphQLError
from rich.console import Console
from rich.logging import RichHandler

from . import checker, config, introspection, parser, utils
from .errors import InvalidOperation, RemoteGraphqlError, TransportError
from .report import CheckSummary, emit, print_kv

app = typer.Typer(help="Check delegated GraphQL operations against a remote schema")
schema_app = typer.Typer(help="Schema operations")
config_app = typer.Typer(help="Configuration")
app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

console = Console()

EXIT_INCOMPATIBLE = 2


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="Remote GraphQL endpoint"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    out: str = typer.Option(..., help="Output file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Introspect a remote endpoint and save the schema snapshot."""
    setup_logging(verbose)
    try:
        cfg = config.load()
        endpoint = url or cfg.default_url
        if not endpoint:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching schema from {endpoint}...[/cyan]")
        if token is None:
            token = cfg.token
        snapshot = introspection.fetch_schema(endpoint, timeout=cfg.timeout, token=token)
        introspection.save_schema_file(out, snapshot)

        print_kv(
            "Schema pulled",
            {"url": endpoint, "types": len(snapshot.types), "fetched_at": utils.now_iso(), "path": out},
        )
    except TransportError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@config_app.command("init")
def config_init(path: Optional[str] = typer.Option(None, help="Config file path")):
    """Write an example config file."""
    written = config.create_example_config(path)
    print_kv("Config written", {"path": written})


@app.command("check")
def check_cmd(
    schema_file: str = typer.Argument(..., help="Local GraphQL SDL file"),
    type_name: str = typer.Option("Query", "--type", help="Type holding the delegated field"),
    field_name: str = typer.Option(..., "--field", help="Delegated field"),
    operation: Optional[str] = typer.Option(None, help="Operation source"),
    operation_file: Optional[str] = typer.Option(None, help="File holding the operation"),
    url: Optional[str] = typer.Option(None, help="Remote GraphQL endpoint"),
    remote_schema: Optional[str] = typer.Option(None, help="Saved remote schema snapshot"),
    timeout: Optional[float] = typer.Option(None, help="Introspection timeout in seconds"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    output: str = typer.Option("console", help="Output format (console|json)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Check that a delegated operation is compatible with the remote schema."""
    setup_logging(verbose)
    cfg = config.load()
    endpoint = url or cfg.default_url or ""

    if not operation and not operation_file:
        console.print("[red]Error: Use --operation or --operation-file.[/red]")
        raise typer.Exit(1)
    if not endpoint and not remote_schema:
        console.print("[red]Error: Use --url, --remote-schema or set default_url in config.[/red]")
        raise typer.Exit(1)

    summary = CheckSummary(
        url=endpoint or f"file://{remote_schema}",
        parent=f"{type_name}.{field_name}",
        operation="",
        compatible=False,
    )
    try:
        source = operation or utils.read_text(operation_file)
        summary.operation = " ".join(source.split())

        local = parser.build_local_schema(utils.read_text(schema_file))
        ctx = parser.build_context(local, type_name, field_name, source, endpoint)
        snapshot = introspection.load_schema_file(remote_schema) if remote_schema else None

        checker.validate_remote_graphql(
            ctx,
            remote_schema=snapshot,
            timeout=timeout if timeout is not None else cfg.timeout,
            token=token if token is not None else cfg.token,
        )
        summary.compatible = True
    except (TransportError, InvalidOperation, GraphQLError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except RemoteGraphqlError as e:
        summary.error_type = type(e).__name__
        summary.message = str(e)

    emit(summary, output)
    if not summary.compatible:
        raise typer.Exit(EXIT_INCOMPATIBLE)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
