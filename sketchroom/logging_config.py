import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger once."""
    root = logging.getLogger()
    if not any(getattr(h, "_sketchroom", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sketchroom = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())
