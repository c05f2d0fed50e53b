"""CLI output utilities and formatting."""

import logging

import click
from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}╔════════════════════════════════════════════════╗{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.CYAN}{Style.BRIGHT}add-remote{Style.RESET_ALL}                                   {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.WHITE}Add a GitHub or GitLab fork as a remote{Style.RESET_ALL}      {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}╚════════════════════════════════════════════════╝{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def question(message: str) -> str:
    """Format prompt text in yellow."""
    return f"{Fore.YELLOW}{message}{Style.RESET_ALL}"


def highlight(message: str) -> str:
    """Format a newly added line in cyan."""
    return f"{Fore.CYAN}{message}{Style.RESET_ALL}"


class EchoHandler(logging.Handler):
    """Send log records to the terminal with the matching colour."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                message = error(message)
            elif record.levelno >= logging.WARNING:
                message = warning(message)
            elif record.levelno <= logging.DEBUG:
                message = f"{Style.DIM}{message}{Style.RESET_ALL}"
            click.echo(message, err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    """Route the package's log records through EchoHandler."""
    logger = logging.getLogger('addremote')
    for handler in list(logger.handlers):
        if isinstance(handler, EchoHandler):
            logger.removeHandler(handler)
    logger.addHandler(EchoHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
