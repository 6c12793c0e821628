"""CLI package for the railroad-vcs tool."""

import logging
import sys

from vcscore.config import EngineConfig

FILE_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(name)s - %(message)s"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: EngineConfig | None = None
) -> None:
    """Send everything to the log file and warnings (by default) to stderr.

    The file records the thread name because the runner's drain threads
    and the manager's worker log alongside the main thread.

    Args:
        verbose: If True, show INFO messages on the console
        quiet: If True, show only errors on the console (wins over verbose)
        config: Optional EngineConfig for log directory/filename settings
    """
    if config is None:
        config = EngineConfig.from_env()

    config.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(config.log_dir / config.log_filename)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    console_handler.setLevel(_console_level(verbose, quiet))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from a previous call
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def main() -> None:
    """Main entry point for the CLI."""
    from cli.parser import app

    app()


__all__ = ["main", "setup_logging"]
