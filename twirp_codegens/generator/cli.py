"""Command-line interfaces: the protoc plugins and the twirp-codegens tool."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from twirp_codegens.generator.driver import run
from twirp_codegens.generator.emitter import VERSION, DecoratorKind, output_file_name, runtime
from twirp_codegens.generator.errors import GenerationError
from twirp_codegens.generator.loader import load_descriptor_set
from twirp_codegens.generator.plugin import run_plugin
from twirp_codegens.generator.registry import Registry
from twirp_codegens.generator.types import FileDescriptor, GenerationRequest, qualify
from twirp_codegens.generator.util import to_camel_case

LOG_LEVEL_ENV = "TWIRP_CODEGENS_LOG_LEVEL"


def _configure_logging(level: str) -> None:
    # stdout carries the plugin response, diagnostics go to stderr
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _log_level_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--log-level",
        envvar=LOG_LEVEL_ENV,
        default="WARNING",
        show_default=True,
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
        help="Diagnostic log level (written to stderr)",
    )(func)


def plugin_command(kind: DecoratorKind) -> click.Command:
    """Build the protoc plugin command for one decorator kind."""

    @click.command(name=kind.plugin_name)
    @click.version_option(VERSION, "--version", message="%(version)s")
    @_log_level_option
    def command(log_level: str) -> None:
        """Read a CodeGeneratorRequest on stdin, write the response to stdout."""
        _configure_logging(log_level)
        code = run_plugin(kind, click.get_binary_stream("stdin"), click.get_binary_stream("stdout"))
        sys.exit(code)

    return command


analytics_plugin = plugin_command(DecoratorKind.ANALYTICS)
logging_plugin = plugin_command(DecoratorKind.LOGGING)


@click.group()
@click.version_option(VERSION, "--version", message="%(version)s")
@_log_level_option
def cli(log_level: str) -> None:
    """Twirp middleware code generator."""
    _configure_logging(log_level)


def _read_descriptor_set(path: str) -> list[FileDescriptor]:
    with open(path, "rb") as f:
        return load_descriptor_set(f.read())


@cli.command()
@click.option(
    "--kind",
    "-k",
    required=True,
    type=click.Choice([k.value for k in DecoratorKind]),
    help="Decorator kind to generate",
)
@click.option("--descriptor-set", "-d", required=True, help="FileDescriptorSet from protoc --descriptor_set_out")
@click.option(
    "--file",
    "-f",
    "files",
    multiple=True,
    help="File to generate (repeatable). Default: every file in the set",
)
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--parameter", "-p", default="", help="Plugin options, key=value,key=value")
def gen(kind: str, descriptor_set: str, files: tuple[str, ...], output_path: str, parameter: str) -> None:
    """Generate decorators from a descriptor set."""
    all_files = _read_descriptor_set(descriptor_set)
    request = GenerationRequest(
        files=all_files,
        files_to_generate=list(files) if files else [f.name for f in all_files],
        parameter=parameter,
    )

    response = run(request, DecoratorKind(kind))
    if response.error is not None:
        click.echo(f"Error: {response.error}", err=True)
        sys.exit(1)

    for generated in response.files:
        target = Path(output_path) / generated.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        click.echo(f"Generated {target}")


@cli.command(name="runtime")
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="twirp_runtime", help="Runtime package name")
def runtime_command(output_path: str, name: str) -> None:
    """Copy the runtime package used by generated code.

    Pass runtime_import=NAME to the plugins to use the copy.
    """
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in runtime().items():
        (runtime_dir / filename).write_text(content, encoding="utf-8")
    click.echo(f"Generated runtime in {runtime_dir}")


@cli.command()
@click.option("--descriptor-set", "-d", required=True, help="FileDescriptorSet from protoc --descriptor_set_out")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(descriptor_set: str, output_json: bool) -> None:
    """Display the services of a descriptor set and their decorators."""
    files = _read_descriptor_set(descriptor_set)
    registry = Registry()
    try:
        registry.build(files)
    except GenerationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_json:
        _output_json(files, registry)
    else:
        _output_plain(files, registry)


def _resolve(registry: Registry, name: str) -> str | None:
    return registry.resolve(name) if name in registry else None


def _decorators(service_name: str) -> list[str]:
    return [to_camel_case(service_name) + kind.suffix for kind in DecoratorKind]


def _output_json(files: list[FileDescriptor], registry: Registry) -> None:
    """Output service info as JSON."""
    data: dict[str, Any] = {}

    for f in files:
        if not f.services:
            continue
        data[f.name] = {
            "package": f.package,
            "outputs": [output_file_name(f.name, kind) for kind in DecoratorKind],
            "services": {
                qualify(f.package, service.name): {
                    "decorators": _decorators(service.name),
                    "methods": [
                        {
                            **method.to_dict(),
                            "input": _resolve(registry, method.input_type),
                            "output": _resolve(registry, method.output_type),
                        }
                        for method in service.methods
                    ],
                }
                for service in f.services
            },
        }

    print(json.dumps(data, indent=2))


def _output_plain(files: list[FileDescriptor], registry: Registry) -> None:
    """Output service info using rich text formatting."""
    console = Console()

    for f in files:
        if not f.services:
            continue
        console.print(f"[bold cyan]{f.name}[/bold cyan] [dim]{f.package}[/dim]")

        for service in f.services:
            console.print(f"  [bold]{qualify(f.package, service.name)}[/bold] -> {', '.join(_decorators(service.name))}")

            table = Table(show_header=True, box=None, padding=(0, 2, 0, 4))
            table.add_column("Method", style="white")
            table.add_column("Input", style="yellow")
            table.add_column("Output", style="yellow")

            for method in service.methods:
                table.add_row(
                    method.name,
                    _resolve(registry, method.input_type) or f"[red]{method.input_type} (unresolved)[/red]",
                    _resolve(registry, method.output_type) or f"[red]{method.output_type} (unresolved)[/red]",
                )

            console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


def analytics_main() -> None:
    """Entry point of protoc-gen-twirp_analytics."""
    analytics_plugin()


def logging_main() -> None:
    """Entry point of protoc-gen-twirp_ln."""
    logging_plugin()


if __name__ == "__main__":
    main()
