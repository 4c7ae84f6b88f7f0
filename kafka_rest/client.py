"""Kafka REST client entry point."""

from typing import Optional

from kafka_rest.api_client import APIClient
from kafka_rest.config import KafkaRestConfig, Option
from kafka_rest.consumers import Consumers
from kafka_rest.logger import ClientLogger
from kafka_rest.models import Broker
from kafka_rest.topics import Topics


class KafkaRest:
    """
    Client for a Kafka REST proxy.

    Holds the configuration and the HTTP session shared by the resource
    clients it creates.
    """

    def __init__(self, *options: Option, config: Optional[KafkaRestConfig] = None):
        """
        Initialize the client.

        Args:
            options: Option setters, applied in order over the defaults
            config: Base configuration (default: load from environment)
        """
        self.config = config or KafkaRestConfig()
        self.config.apply(*options)
        self.config.validate()

        self.logger = ClientLogger(self.config)
        self.api = APIClient(self.config, self.logger)
        self._closed = False

        self.logger.debug("Kafka REST client initialized", url=self.config.url)

    def broker(self) -> Broker:
        """List the broker ids of the cluster."""
        data = self.api.request("GET", ["brokers"])
        return Broker.from_dict(data)

    def new_topics(self) -> Topics:
        """Return a Topics client."""
        return Topics(self)

    def new_consumers(self, consumer_group: Optional[str] = None) -> Consumers:
        """Return a Consumers client, with an optional default consumer group."""
        return Consumers(self, consumer_group)

    def close(self) -> None:
        """Close the HTTP session and the log handlers."""
        if not self._closed:
            self._closed = True
            self.api.close()
            self.logger.log_metrics()
            self.logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def new(*options: Option) -> KafkaRest:
    """
    Create a client from the defaults and the given option setters.

    Example:
        >>> k = new(set_url("http://localhost:8082"), v2_version, earliest_offset)
        >>> k.broker().brokers
        [1, 2, 3]
    """
    return KafkaRest(*options)
