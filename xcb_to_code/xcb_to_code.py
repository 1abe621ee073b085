import json
import logging

import click

from .pipeline import GenerationError, GeneratorConfig, OutputMode, PipelineGenerator

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _ClickEchoHandler(logging.Handler):
    """Logging handler writing through click.echo to stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: int) -> None:
    """Send package log records to stderr; -v for INFO, -vv for DEBUG."""
    logger = logging.getLogger("xcb_to_code")
    if verbose <= 0:
        logger.setLevel(logging.WARNING)
    elif verbose == 1:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--proto-path",
    "-p",
    default=None,
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory holding imported descriptions (default: next to PATH)",
)
@click.option("--package", "-k", default=None, type=str, help="Go package name of the generated file")
@click.option("--force", is_flag=True, default=False, help="Overwrite OUTPUT if it exists")
@click.option("--format", "format_", is_flag=True, default=False, help="Run gofmt on the generated code")
@click.option("--verbose", "-v", count=True, help="Increase logging verbosity")
@click.argument("path", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, type=click.Path(dir_okay=False, resolve_path=True))
def xcb_to_code(config, proto_path, package, force, format_, verbose, path, output):
    _configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            try:
                config = GeneratorConfig.from_dict(json.load(f))
            except json.JSONDecodeError as e:
                raise click.ClickException(f"Invalid config file {config}: {e}") from e
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if proto_path is not None:
        config.proto_path = proto_path
    if package is not None:
        config.package_name = package
    if force:
        config.output.mode = OutputMode.FORCE
    if format_:
        config.formatter.enabled = True

    codegen = PipelineGenerator(path, config)
    try:
        codegen.write(output)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e
