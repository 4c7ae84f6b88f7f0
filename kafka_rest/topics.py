"""Topic listing, metadata and produce operations."""

from typing import TYPE_CHECKING, List, Optional

from kafka_rest.config import Format
from kafka_rest.errors import KafkaRestError, ProduceError, SchemaError
from kafka_rest.models import ProducerMessage, ProducerResponse, Topic
from kafka_rest.serializers import validate_avro_records

if TYPE_CHECKING:
    from kafka_rest.client import KafkaRest
    from kafka_rest.partitions import Partitions


def check_avro_schema(data_format: str, message: ProducerMessage) -> None:
    """Reject an Avro produce request the proxy could not serialize.

    Raises:
        SchemaError: If neither a value schema nor a value schema id is set,
            if a given schema does not parse, or if a record does not match it
    """
    if data_format != Format.AVRO.value:
        return
    if not message.value_schema and not message.value_schema_id:
        raise SchemaError("Must provide a value schema or value schema id for Avro format")
    if message.value_schema:
        validate_avro_records(message.value_schema, [r.value for r in message.records])
    if message.key_schema:
        validate_avro_records(
            message.key_schema, [r.key for r in message.records if r.key is not None]
        )


def produce_result(kafka: "KafkaRest", target: str, data: Optional[dict]) -> ProducerResponse:
    """Decode a produce response, raising ProduceError if any record failed."""
    response = ProducerResponse.from_dict(data)
    failures = response.failures()

    kafka.logger.record_produced(len(response.offsets), failed=len(failures))

    if failures:
        kafka.logger.warning(
            "Records rejected by proxy",
            target=target,
            failed=len(failures),
            total=len(response.offsets),
        )
        raise ProduceError(target, response, failures)

    return response


class Topics:
    """Client for the /topics resource."""

    def __init__(self, kafka: "KafkaRest"):
        self.kafka = kafka

    def names(self) -> List[str]:
        """List all topic names."""
        data = self.kafka.api.request("GET", ["topics"])
        return list(data or [])

    def topic(self, topic_name: str) -> Topic:
        """Get the metadata of one topic."""
        data = self.kafka.api.request("GET", ["topics", topic_name])
        return Topic.from_dict(data)

    def topics(self) -> List[Topic]:
        """List all topics with their metadata, one request per topic.

        Raises:
            KafkaRestError: The first failed request. Topics fetched before
                it are kept on ``error.topics``.
        """
        result: List[Topic] = []
        for name in self.names():
            try:
                result.append(self.topic(name))
            except KafkaRestError as e:
                self.kafka.logger.warning(
                    "Topic listing interrupted", topic=name, fetched=len(result)
                )
                e.topics = result
                raise
        return result

    def produce(self, topic_name: str, message: ProducerMessage) -> ProducerResponse:
        """Produce records to a topic.

        Args:
            topic_name: Target topic
            message: Records, plus schemas for Avro format

        Returns:
            The per-record offsets

        Raises:
            SchemaError: Avro format without a usable value schema, or a record
                that does not match it (no request is sent)
            ProduceError: Some records were rejected; ``error.response`` holds
                the full response
        """
        check_avro_schema(self.kafka.config.format, message)

        data = self.kafka.api.request("POST", ["topics", topic_name], body=message.to_dict())
        return produce_result(self.kafka, f"topic {topic_name}", data)

    def new_partitions(self, topic: Optional[Topic] = None) -> "Partitions":
        """Return a Partitions client, optionally bound to a topic."""
        from kafka_rest.partitions import Partitions

        return Partitions(self.kafka, topic)
