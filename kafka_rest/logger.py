"""
Structured logging module for the Kafka REST client.

Supports both JSON and text output formats for flexibility in different environments.
"""

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any, List

from kafka_rest.config import KafkaRestConfig


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, client_name: str = "kafka-rest"):
        """Initialize JSON formatter.

        Args:
            client_name: Name of the client for logging context
        """
        super().__init__()
        self.client_name = client_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry = {
            "timestamp": _utc_now(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "client": self.client_name,
        }

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter, with structured fields appended as key=value."""

    def __init__(self, client_name: str = "kafka-rest"):
        super().__init__(
            fmt=f"%(asctime)s [{client_name}] %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            line += " " + " ".join(f"{k}={v}" for k, v in extra_fields.items())
        return line


class ClientLogger:
    """Logger wrapper with structured logging support and request counters."""

    def __init__(self, config: KafkaRestConfig):
        """Initialize client logger.

        Args:
            config: Client configuration
        """
        self.config = config
        self.logger = logging.getLogger("kafka_rest")
        self._handlers: List[logging.Handler] = []
        self._setup_logger()

        # Counters are updated from the poller thread as well as the caller's
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "requests": 0,
            "request_errors": 0,
            "messages_fetched": 0,
            "records_produced": 0,
            "produce_errors": 0,
            "start_time": _utc_now(),
        }

    def _setup_logger(self) -> None:
        """Configure the logger based on config."""
        self.logger.setLevel(getattr(logging, self.config.log_level.upper()))
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        if self.config.log_format == "json":
            formatter = JsonFormatter(self.config.client_name)
        else:
            formatter = TextFormatter(self.config.client_name)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self._handlers.append(console_handler)

        if self.config.log_file:
            file_handler = logging.FileHandler(self.config.log_file)
            file_handler.setFormatter(formatter)
            self._handlers.append(file_handler)

        for handler in self._handlers:
            self.logger.addHandler(handler)

    def close(self) -> None:
        """Detach and close the handlers this logger installed."""
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

    def _log_with_extra(self, level: int, message: str, **extra_fields: Any) -> None:
        """Log with extra structured fields."""
        if not self.logger.isEnabledFor(level):
            return
        record = self.logger.makeRecord(
            name=self.logger.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
        record.extra_fields = extra_fields
        self.logger.handle(record)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message with optional extra fields."""
        self._log_with_extra(logging.INFO, message, **extra)

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message with optional extra fields."""
        self._log_with_extra(logging.DEBUG, message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message with optional extra fields."""
        self._log_with_extra(logging.WARNING, message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message with optional extra fields."""
        self._log_with_extra(logging.ERROR, message, **extra)

    def exception(self, message: str, **extra: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, extra={"extra_fields": extra})

    # Metric tracking methods
    def record_request(self, success: bool = True) -> None:
        """Record an HTTP request to the proxy."""
        with self._metrics_lock:
            self.metrics["requests"] += 1
            if not success:
                self.metrics["request_errors"] += 1

    def record_fetched(self, count: int = 1) -> None:
        """Record messages fetched by a consumer."""
        with self._metrics_lock:
            self.metrics["messages_fetched"] += count

    def record_produced(self, count: int = 1, failed: int = 0) -> None:
        """Record records produced, and how many of them the proxy rejected."""
        with self._metrics_lock:
            self.metrics["records_produced"] += count
            self.metrics["produce_errors"] += failed

    def get_metrics(self) -> dict:
        """Get current metrics."""
        with self._metrics_lock:
            snapshot = dict(self.metrics)
        snapshot["current_time"] = _utc_now()
        return snapshot

    def log_metrics(self) -> None:
        """Log current metrics."""
        self.info("Client metrics", **self.get_metrics())
