"""
Configuration module for the Kafka REST client.

Defaults come from environment variables; option setters are applied
on top of them, in order, when a client is built.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional


class Format(str, Enum):
    """Embedded format of keys and values."""

    JSON = "json"
    BINARY = "binary"
    AVRO = "avro"


class Offset(str, Enum):
    """Offset reset policy for new consumer instances.

    EARLIEST/LATEST are the API v2 names, SMALLEST/LARGEST the API v1 ones.
    """

    EARLIEST = "earliest"
    LATEST = "latest"
    SMALLEST = "smallest"
    LARGEST = "largest"


class Version(str, Enum):
    """REST proxy API version."""

    V1 = "v1"
    V2 = "v2"


@dataclass
class KafkaRestConfig:
    """Configuration for the Kafka REST client.

    All values can be set via environment variables.
    """

    # Proxy connection
    url: str = field(default_factory=lambda: os.getenv("KAFKA_REST_URL", "http://localhost:8082"))
    timeout: float = field(default_factory=lambda: float(os.getenv("KAFKA_REST_TIMEOUT", "60")))
    accept: str = field(
        default_factory=lambda: os.getenv(
            "KAFKA_REST_ACCEPT", "application/vnd.kafka+json, application/json"
        )
    )
    content_type: str = field(
        default_factory=lambda: os.getenv("KAFKA_REST_CONTENT_TYPE", "application/vnd.kafka+json")
    )
    headers: Dict[str, str] = field(default_factory=dict)

    # Data defaults
    format: str = field(default_factory=lambda: os.getenv("KAFKA_REST_FORMAT", Format.BINARY.value))
    offset: str = field(
        default_factory=lambda: os.getenv("KAFKA_REST_OFFSET", Offset.LARGEST.value)
    )
    version: str = field(default_factory=lambda: os.getenv("KAFKA_REST_VERSION", Version.V1.value))

    # Logging settings
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))  # json, text

    # Client identification
    client_name: str = field(
        default_factory=lambda: os.getenv("KAFKA_REST_CLIENT_NAME", "kafka-rest")
    )

    def apply(self, *options: Callable[["KafkaRestConfig"], None]) -> None:
        """Apply option setters in order.

        Args:
            options: Callables taking this config; any may raise ValueError
        """
        for option in options:
            option(self)

    def validate(self) -> None:
        """Validate configuration and raise ValueError if invalid."""
        if not self.url:
            raise ValueError("KAFKA_REST_URL is required")

        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout: {self.timeout}")

        if self.format not in {f.value for f in Format}:
            raise ValueError(f"Invalid format: {self.format}")

        if self.offset not in {o.value for o in Offset}:
            raise ValueError(f"Invalid offset: {self.offset}")

        if self.version not in {v.value for v in Version}:
            raise ValueError(f"Invalid version: {self.version}")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.log_format not in ("json", "text"):
            raise ValueError(f"Invalid log_format: {self.log_format}")

    def __str__(self) -> str:
        """Return a string representation without pass-through headers."""
        return (
            f"KafkaRestConfig(\n"
            f"  url={self.url},\n"
            f"  timeout={self.timeout},\n"
            f"  accept={self.accept},\n"
            f"  content_type={self.content_type},\n"
            f"  format={self.format},\n"
            f"  offset={self.offset},\n"
            f"  version={self.version},\n"
            f"  client_name={self.client_name}\n"
            f")"
        )


Option = Callable[[KafkaRestConfig], None]


def set_url(url: str) -> Option:
    """Return a setter applying the proxy base URL."""

    def option(config: KafkaRestConfig) -> None:
        if not url:
            raise ValueError("url must not be empty")
        config.url = url

    return option


def set_timeout(timeout: float) -> Option:
    """Return a setter applying the client-wide request timeout, in seconds."""

    def option(config: KafkaRestConfig) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        config.timeout = timeout

    return option


def set_accept(accept: str) -> Option:
    """Return a setter applying the Accept header value."""

    def option(config: KafkaRestConfig) -> None:
        config.accept = accept

    return option


def set_content_type(content_type: str) -> Option:
    """Return a setter applying the Content-Type header value."""

    def option(config: KafkaRestConfig) -> None:
        config.content_type = content_type

    return option


def set_headers(headers: Dict[str, str]) -> Option:
    """Return a setter adding headers passed through on every request."""

    def option(config: KafkaRestConfig) -> None:
        config.headers.update(headers)

    return option


def json_format(config: KafkaRestConfig) -> None:
    config.format = Format.JSON.value


def binary_format(config: KafkaRestConfig) -> None:
    config.format = Format.BINARY.value


def avro_format(config: KafkaRestConfig) -> None:
    config.format = Format.AVRO.value


def earliest_offset(config: KafkaRestConfig) -> None:
    config.offset = Offset.EARLIEST.value


def latest_offset(config: KafkaRestConfig) -> None:
    config.offset = Offset.LATEST.value


def smallest_offset(config: KafkaRestConfig) -> None:
    config.offset = Offset.SMALLEST.value


def largest_offset(config: KafkaRestConfig) -> None:
    config.offset = Offset.LARGEST.value


def v1_version(config: KafkaRestConfig) -> None:
    config.version = Version.V1.value


def v2_version(config: KafkaRestConfig) -> None:
    config.version = Version.V2.value
