import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog


def configure_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_json: bool = False,
) -> None:
    """Route :mod:`structlog` events through the stdlib :mod:`logging` machinery.

    Events go to `log_file` if given, stderr otherwise, rendered as JSON
    lines if `log_json` is set and as key=value console lines if not.
    """
    if log_file is not None:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler: logging.Handler = logging.FileHandler(str(log_file), mode="a")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
