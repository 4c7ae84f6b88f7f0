"""
Exception classes for the Kafka REST client.

Every error raised by the client derives from KafkaRestError. Argument
and schema errors are also ValueErrors and are raised before any request
is sent.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from kafka_rest.models import ProducerOffset, ProducerResponse


class KafkaRestError(Exception):
    """Base exception class for all Kafka REST client errors."""


class TransportError(KafkaRestError):
    """The request never produced an HTTP response (connection, timeout)."""


class DecodeError(KafkaRestError):
    """A successful response carried a body that is not valid JSON."""


class APIError(KafkaRestError):
    """The proxy answered with an unexpected status code.

    Attributes:
        status_code: HTTP status code received
        reason: HTTP reason phrase
        error_code: Proxy error code, 0 when the body did not carry one
        error_message: Proxy error message, empty when absent
        body: Raw response body
    """

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        error_code: int = 0,
        error_message: str = "",
        body: str = "",
        decoded: bool = True,
    ):
        self.status_code = status_code
        self.reason = reason
        self.error_code = error_code
        self.error_message = error_message
        self.body = body

        if decoded:
            message = (
                f"API Error: StatusCode {status_code} {reason} "
                f"ErrorCode {error_code} {error_message}"
            ).rstrip()
        else:
            message = f"API Error: {body}"
        super().__init__(message)


class ProduceError(KafkaRestError):
    """One or more records of a produce request were rejected by the proxy.

    The request itself succeeded, so ``response`` holds the full decoded
    ProducerResponse, including the offsets of the records that were written.
    """

    def __init__(
        self,
        target: str,
        response: "ProducerResponse",
        failures: Optional[List["ProducerOffset"]] = None,
    ):
        self.target = target
        self.response = response
        self.failures = failures if failures is not None else response.failures()

        details = "; ".join(
            f"partition {f.partition} error_code {f.error_code}: {f.error}" for f in self.failures
        )
        super().__init__(f"Error: produce messages to {target}: {details}")


class MissingArgumentError(KafkaRestError, ValueError):
    """A required argument (consumer group, consumer name, topic) is missing."""


class SchemaError(KafkaRestError, ValueError):
    """An Avro produce request lacks a usable value schema."""
