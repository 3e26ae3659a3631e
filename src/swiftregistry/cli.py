"""Command-line interface for the SWIFT code registry."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console

if TYPE_CHECKING:
    from swiftregistry.config.settings import RegistryConfig
    from swiftregistry.store.base import RegistryStore

app = typer.Typer(
    name="swiftregistry",
    help="Registry of SWIFT/BIC bank identifier codes.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file. Defaults are used when omitted.",
        exists=True,
        dir_okay=False,
    ),
]


def _setup(config: Path | None) -> "RegistryConfig":
    """Load configuration and configure logging."""
    import yaml

    from swiftregistry.config.loader import load_config
    from swiftregistry.utils.logging import configure_logging

    try:
        registry_config = load_config(config)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(
        registry_config.logging.level, json_output=registry_config.logging.json_output
    )
    return registry_config


def _open_store(registry_config: "RegistryConfig") -> "RegistryStore":
    from swiftregistry.errors import StoreError
    from swiftregistry.store import open_store

    try:
        return open_store(registry_config.store)
    except StoreError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


def _print_outcome(outcome: Any) -> None:
    """Print a view as JSON, or a failure in red and exit non-zero."""
    from swiftregistry.errors import Failure

    if isinstance(outcome, Failure):
        console.print(f"[red]{outcome.kind.value}: {outcome.message}[/red]")
        raise typer.Exit(code=1)
    console.print_json(data=outcome.to_dict())


@app.command()
def serve(
    config: ConfigOption = None,
    host: Annotated[
        str | None, typer.Option("--host", help="Interface to bind (overrides config).")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", "-p", help="TCP port (overrides config).")
    ] = None,
) -> None:
    """Ingest the dataset into an empty registry, then serve the HTTP API."""
    from swiftregistry.ingestion import ingest_if_empty
    from swiftregistry.server import start_server
    from swiftregistry.service import SwiftCodeService

    registry_config = _setup(config)
    store = _open_store(registry_config)

    with store:
        ingestion = registry_config.ingestion
        if ingestion.enabled:
            result = ingest_if_empty(
                ingestion.source,
                store,
                batch_size=ingestion.batch_size,
                encoding=ingestion.encoding,
                delimiter=ingestion.delimiter,
            )
            if not result.ok:
                console.print(
                    f"[yellow]Ingestion aborted ({result.error}); "
                    f"starting with {store.count()} entries.[/yellow]"
                )

        server_config = registry_config.server
        bind_host = host if host is not None else server_config.host
        bind_port = port if port is not None else server_config.port
        console.print(
            f"[blue]Serving SWIFT code registry on http://{bind_host}:{bind_port}[/blue]"
        )
        start_server(SwiftCodeService(store), host=bind_host, port=bind_port)


@app.command()
def ingest(
    config: ConfigOption = None,
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Dataset CSV (overrides config)."),
    ] = None,
) -> None:
    """Load the dataset into the registry if it is empty."""
    from swiftregistry.ingestion import ingest_if_empty
    from swiftregistry.validation import ConsoleReporter

    registry_config = _setup(config)
    ingestion = registry_config.ingestion
    dataset = source or ingestion.source

    console.print(f"[blue]Ingesting SWIFT codes from {dataset}[/blue]")
    with _open_store(registry_config) as store:
        result = ingest_if_empty(
            dataset,
            store,
            batch_size=ingestion.batch_size,
            encoding=ingestion.encoding,
            delimiter=ingestion.delimiter,
        )

    ConsoleReporter(console).print_result(result)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def validate(
    config: ConfigOption = None,
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Dataset CSV (overrides config)."),
    ] = None,
) -> None:
    """Check a dataset against the ingestion rules without storing anything."""
    from swiftregistry.ingestion import IngestionPipeline
    from swiftregistry.validation import ConsoleReporter

    registry_config = _setup(config)
    ingestion = registry_config.ingestion
    dataset = source or ingestion.source

    console.print(f"[blue]Validating {dataset}...[/blue]")
    pipeline = IngestionPipeline(
        dataset,
        batch_size=ingestion.batch_size,
        encoding=ingestion.encoding,
        delimiter=ingestion.delimiter,
    )
    result = pipeline.validate()

    ConsoleReporter(console).print_result(result, title="Validation")
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def lookup(
    swift_code: Annotated[str, typer.Argument(help="SWIFT code, any letter case.")],
    config: ConfigOption = None,
) -> None:
    """Show one SWIFT code; headquarters include their branches."""
    from swiftregistry.service import SwiftCodeService

    registry_config = _setup(config)
    with _open_store(registry_config) as store:
        _print_outcome(SwiftCodeService(store).get_details(swift_code))


@app.command()
def country(
    country_iso2: Annotated[str, typer.Argument(help="Two-letter country code.")],
    config: ConfigOption = None,
) -> None:
    """List all SWIFT codes of a country."""
    from swiftregistry.service import SwiftCodeService

    registry_config = _setup(config)
    with _open_store(registry_config) as store:
        _print_outcome(SwiftCodeService(store).get_by_country(country_iso2))


@app.command()
def add(
    swift_code: Annotated[str, typer.Option("--code", help="SWIFT code (8 or 11 characters).")],
    bank_name: Annotated[str, typer.Option("--bank-name", help="Bank name.")],
    country_iso2: Annotated[str, typer.Option("--country-iso2", help="Two-letter country code.")],
    country_name: Annotated[str, typer.Option("--country-name", help="Country name.")],
    is_headquarter: Annotated[
        bool, typer.Option("--hq/--no-hq", help="Whether the code is a headquarters code.")
    ],
    address: Annotated[str | None, typer.Option("--address", help="Street address.")] = None,
    config: ConfigOption = None,
) -> None:
    """Add a new SWIFT code after validation."""
    from swiftregistry.service import SwiftCodeService

    registry_config = _setup(config)
    payload = {
        "swiftCode": swift_code,
        "bankName": bank_name,
        "address": address,
        "countryISO2": country_iso2,
        "countryName": country_name,
        "isHeadquarter": is_headquarter,
    }
    with _open_store(registry_config) as store:
        _print_outcome(SwiftCodeService(store).add(payload))


@app.command()
def delete(
    swift_code: Annotated[str, typer.Argument(help="SWIFT code, any letter case.")],
    config: ConfigOption = None,
) -> None:
    """Delete a SWIFT code."""
    from swiftregistry.service import SwiftCodeService

    registry_config = _setup(config)
    with _open_store(registry_config) as store:
        _print_outcome(SwiftCodeService(store).delete(swift_code))


@app.command()
def version() -> None:
    """Show version information."""
    from swiftregistry import __version__

    console.print(f"swiftregistry version {__version__}")


if __name__ == "__main__":
    app()
