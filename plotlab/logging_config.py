"""
Logging setup shared by the API server and the CLI.
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Set up root logging at the given level name."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger().setLevel(log_level)

    # matplotlib's font manager logs every font it scans at DEBUG/INFO
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
