"""Logging setup shared by ``python main.py`` and ``uvicorn presign_gateway.main:app``."""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class SuppressHealthCheckAccessLog(logging.Filter):
    """Drop uvicorn access log records for the health check endpoint."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        args: Any = record.args
        # uvicorn.access args: (client_addr, method, full_path, http_version, status_code)
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2])
            if path == "/health" or path.startswith("/health?"):
                return False
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("presign_gateway").setLevel(level.upper())

    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, SuppressHealthCheckAccessLog) for f in access_logger.filters):
        access_logger.addFilter(SuppressHealthCheckAccessLog())
