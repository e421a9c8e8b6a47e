"""Logging setup and request-scoped loggers."""

import logging

LOG_FORMAT = "%(asctime)s  %(name)-25s  %(levelname)-8s  %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
    # Access lines come from RequestContextMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class RequestLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with request metadata."""

    def process(self, msg, kwargs):
        fields = " ".join(f"{k}={v}" for k, v in self.extra.items() if v)
        return (f"[{fields}] {msg}" if fields else msg), kwargs

    def bind(self, **fields) -> "RequestLogger":
        """Return a new adapter carrying the current fields plus *fields*."""
        return RequestLogger(self.logger, {**self.extra, **fields})


def request_logger(
    name: str,
    request_id: str | None = None,
    correlation_id: str | None = None,
) -> RequestLogger:
    return RequestLogger(
        logging.getLogger(name),
        {"request_id": request_id, "correlation_id": correlation_id},
    )
