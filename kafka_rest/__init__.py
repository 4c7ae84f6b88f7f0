"""
Kafka REST - a client library for the Kafka REST proxy.

Exposes brokers, topics, partitions and consumer groups as typed method
calls over HTTP, plus a background polling loop for consumers.

Typical usage:
    from kafka_rest import new, set_url

    k = new(set_url("http://localhost:8082"))
    print(k.broker().brokers)
"""

from kafka_rest.client import KafkaRest, new
from kafka_rest.config import (
    Format,
    KafkaRestConfig,
    Offset,
    Version,
    avro_format,
    binary_format,
    earliest_offset,
    json_format,
    largest_offset,
    latest_offset,
    set_accept,
    set_content_type,
    set_headers,
    set_timeout,
    set_url,
    smallest_offset,
    v1_version,
    v2_version,
)
from kafka_rest.consumers import Consumers
from kafka_rest.errors import (
    APIError,
    DecodeError,
    KafkaRestError,
    MissingArgumentError,
    ProduceError,
    SchemaError,
    TransportError,
)
from kafka_rest.models import (
    Broker,
    ConsumerInstance,
    ConsumerOffset,
    ConsumerOffsets,
    ConsumerPartition,
    ConsumerPartitions,
    ConsumerRequest,
    FetchArgument,
    Message,
    Partition,
    ProducerMessage,
    ProducerOffset,
    ProducerRecord,
    ProducerResponse,
    Replica,
    Topic,
    TopicList,
    TopicPattern,
)
from kafka_rest.partitions import Partitions
from kafka_rest.poller import Poller
from kafka_rest.serializers import dumps
from kafka_rest.topics import Topics

__version__ = "1.0.0"
__all__ = [
    "KafkaRest",
    "new",
    "KafkaRestConfig",
    "Format",
    "Offset",
    "Version",
    "set_url",
    "set_timeout",
    "set_accept",
    "set_content_type",
    "set_headers",
    "json_format",
    "binary_format",
    "avro_format",
    "earliest_offset",
    "latest_offset",
    "smallest_offset",
    "largest_offset",
    "v1_version",
    "v2_version",
    "Topics",
    "Partitions",
    "Consumers",
    "Poller",
    "Broker",
    "Replica",
    "Partition",
    "Topic",
    "ConsumerRequest",
    "ConsumerInstance",
    "ConsumerOffset",
    "ConsumerOffsets",
    "ConsumerPartition",
    "ConsumerPartitions",
    "TopicList",
    "TopicPattern",
    "Message",
    "ProducerRecord",
    "ProducerMessage",
    "ProducerOffset",
    "ProducerResponse",
    "FetchArgument",
    "KafkaRestError",
    "TransportError",
    "APIError",
    "DecodeError",
    "ProduceError",
    "MissingArgumentError",
    "SchemaError",
    "dumps",
]
