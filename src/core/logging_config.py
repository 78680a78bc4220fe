import logging
import sys
import os


def setup_logging(level: str = None) -> logging.Logger:
    """Configure logging for the legend frame loop."""
    log_level = level or os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    root = logging.getLogger("legend")
    root.setLevel(numeric_level)
    # Calling twice must not stack handlers
    if not any(h.get_name() == "legend" for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        handler.set_name("legend")
        root.addHandler(handler)
    root.propagate = False

    logging.basicConfig(level=logging.WARNING)

    for name in ("PIL", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
