"""Partition metadata and produce operations."""

from typing import TYPE_CHECKING, List, Optional

from kafka_rest.errors import MissingArgumentError
from kafka_rest.models import Partition, ProducerMessage, ProducerResponse, Topic
from kafka_rest.topics import check_avro_schema, produce_result

if TYPE_CHECKING:
    from kafka_rest.client import KafkaRest


class Partitions:
    """Client for the /topics/{name}/partitions resource.

    When bound to a topic, its name is used whenever no topic name is passed.
    """

    def __init__(self, kafka: "KafkaRest", topic: Optional[Topic] = None):
        self.kafka = kafka
        self.topic = topic

    def _topic_name(self, topic_name: Optional[str]) -> str:
        if topic_name:
            return topic_name
        if self.topic is not None and self.topic.name:
            return self.topic.name
        raise MissingArgumentError("Error: empty topic_name")

    def partitions(self, topic_name: Optional[str] = None) -> List[Partition]:
        """List the partitions of a topic."""
        name = self._topic_name(topic_name)
        data = self.kafka.api.request("GET", ["topics", name, "partitions"])
        return [Partition.from_dict(p) for p in data or []]

    def partition(self, partition_id: int, topic_name: Optional[str] = None) -> Partition:
        """Get one partition of a topic."""
        name = self._topic_name(topic_name)
        data = self.kafka.api.request("GET", ["topics", name, "partitions", partition_id])
        return Partition.from_dict(data)

    def produce(
        self,
        partition_id: int,
        message: ProducerMessage,
        topic_name: Optional[str] = None,
    ) -> ProducerResponse:
        """Produce records to one partition of a topic.

        Raises:
            MissingArgumentError: No topic name given and none bound
            SchemaError: Avro format without a usable value schema, or a record
                that does not match it
            ProduceError: Some records were rejected
        """
        check_avro_schema(self.kafka.config.format, message)
        name = self._topic_name(topic_name)

        data = self.kafka.api.request(
            "POST", ["topics", name, "partitions", partition_id], body=message.to_dict()
        )
        return produce_result(self.kafka, f"partition {partition_id} of topic {name}", data)
