"""CLI entry point for api-doc-registrar."""

import sys
from pathlib import Path

import click

from api_doc_registrar.config import get_settings
from api_doc_registrar.errors import RegistrarError
from api_doc_registrar.formatter.base import Formatter
from api_doc_registrar.formatter.dispatch import (
    available_formats,
    is_viewer_format,
    resolve_formatter_or_default,
    resolve_formatter_strict,
)
from api_doc_registrar.manifest import load_manifest
from api_doc_registrar.observability import setup_logging
from api_doc_registrar.registry import ApiRegistry
from api_doc_registrar.spec_url import detect_server_url, resolve_spec_url


def _load_registry(manifests: tuple[Path, ...]) -> ApiRegistry:
    registry = ApiRegistry()
    for manifest in manifests:
        load_manifest(manifest, registry)
    return registry


def _emit(formatter: Formatter, registry: ApiRegistry, output: Path | None):
    document = formatter.render(registry.snapshot())
    if output is None:
        formatter.write(document, sys.stdout)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as sink:
        formatter.write(document, sink)
    click.echo(f"Wrote {formatter.content_type} to {output}", err=True)


@click.group()
@click.option("--log-level", default=None, help="Logging level (defaults to API_DOCS_LOG_LEVEL).")
def main(log_level: str | None):
    """API Doc Registrar — render OpenAPI documents and viewers from API manifests."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@main.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("-f", "--format", "fmt", default=None, help="Output format (see `formats`).")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout).")
@click.option("--server-url", default=None, help="Server URL written into OpenAPI documents.")
@click.option("--host", default=None, help="Derive the server URL from this host.")
@click.option("--forwarded-proto", default=None, help="Scheme reported by a proxy (X-Forwarded-Proto).")
@click.option("--spec-url", default=None, help="Document URL loaded by viewers.")
@click.option("--request-path", default="", help="Path the viewer page is served at.")
def render(
    manifests: tuple[Path, ...],
    fmt: str | None,
    output: Path | None,
    server_url: str | None,
    host: str | None,
    forwarded_proto: str | None,
    spec_url: str | None,
    request_path: str,
):
    """Render documentation in exactly the requested format."""
    settings = get_settings()
    fmt = fmt or settings.default_format

    if server_url is None and host:
        server_url = detect_server_url(host, forwarded_proto=forwarded_proto)
    if is_viewer_format(fmt):
        spec_url = resolve_spec_url(spec_url, request_path)

    try:
        formatter = resolve_formatter_strict(
            fmt,
            spec_url=spec_url,
            server_url=server_url or settings.server_url,
            title=settings.doc_title,
            description=settings.doc_description,
            version=settings.doc_version,
        )
        registry = _load_registry(manifests)
    except RegistrarError as e:
        raise click.ClickException(e.message)

    _emit(formatter, registry, output)


@main.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("-f", "--format", "fmt", default="openapi-v3.0", help="Output format; unknown formats fall back to OpenAPI 3.0.")
@click.option("--request-path", default="", help="Path the page is served at.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout).")
def docs(manifests: tuple[Path, ...], fmt: str, request_path: str, output: Path | None):
    """Render documentation, falling back to OpenAPI 3.0 for unknown formats."""
    settings = get_settings()
    formatter = resolve_formatter_or_default(
        fmt,
        request_path,
        server_url=settings.server_url,
        title=settings.doc_title,
        description=settings.doc_description,
        version=settings.doc_version,
    )
    try:
        registry = _load_registry(manifests)
    except RegistrarError as e:
        raise click.ClickException(e.message)

    _emit(formatter, registry, output)


@main.command()
def formats():
    """List the available output formats."""
    for name in available_formats():
        click.echo(name)
