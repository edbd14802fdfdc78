"""Console logging for the CLI."""

import logging

import click

LOG_PREFIX = "DynamoDB Global Tables: "


class ClickEchoHandler(logging.Handler):
    """Writes records through ``click.echo`` with the tool's prefix.

    Informational messages are yellow on stdout; warnings and errors are red
    on stderr.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            is_error = record.levelno >= logging.WARNING
            styled = click.style(message, fg="red" if is_error else "yellow")
            click.echo(f"{LOG_PREFIX}{styled}", err=is_error)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Attach a console handler to the package logger.

    Calling this again replaces the previous handler.
    """
    package_logger = logging.getLogger("ddb_global_tables")
    for existing in list(package_logger.handlers):
        if isinstance(existing, ClickEchoHandler):
            package_logger.removeHandler(existing)

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
