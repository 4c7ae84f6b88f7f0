"""Value types mirroring the REST proxy payloads."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from kafka_rest.serializers import decode_binary, encode_binary


@dataclass(frozen=True)
class Broker:
    """Broker ids of the cluster."""

    brokers: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Broker":
        data = data or {}
        return cls(brokers=list(data.get("brokers") or []))

    def to_dict(self) -> dict:
        return {"brokers": list(self.brokers)}


@dataclass(frozen=True)
class Replica:
    broker: int = 0
    leader: bool = False
    in_sync: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Replica":
        data = data or {}
        return cls(
            broker=data.get("broker", 0),
            leader=data.get("leader", False),
            in_sync=data.get("in_sync", False),
        )

    def to_dict(self) -> dict:
        return {"broker": self.broker, "leader": self.leader, "in_sync": self.in_sync}


@dataclass(frozen=True)
class Partition:
    """A topic partition with its leader broker and replica set."""

    partition: int = 0
    leader: int = 0
    replicas: List[Replica] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Partition":
        data = data or {}
        return cls(
            partition=data.get("partition", 0),
            leader=data.get("leader", 0),
            replicas=[Replica.from_dict(r) for r in data.get("replicas") or []],
        )

    def to_dict(self) -> dict:
        return {
            "partition": self.partition,
            "leader": self.leader,
            "replicas": [r.to_dict() for r in self.replicas],
        }


@dataclass(frozen=True)
class Topic:
    """A topic; ``configs`` is passed through exactly as the proxy returns it."""

    name: str = ""
    configs: Any = None
    partitions: List[Partition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Topic":
        data = data or {}
        return cls(
            name=data.get("name", ""),
            configs=data.get("configs"),
            partitions=[Partition.from_dict(p) for p in data.get("partitions") or []],
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "configs": self.configs,
            "partitions": [p.to_dict() for p in self.partitions],
        }


@dataclass(frozen=True)
class ConsumerRequest:
    """Settings for a new consumer instance. An empty name lets the proxy pick one."""

    format: str
    offset: str
    auto_commit: str = "true"
    name: str = ""

    def to_dict(self) -> dict:
        body = {
            "format": self.format,
            "auto.offset.reset": self.offset,
            "auto.commit.enable": self.auto_commit,
        }
        if self.name:
            body["name"] = self.name
        return body


@dataclass(frozen=True)
class ConsumerInstance:
    consumer_name: str = ""
    base_uri: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ConsumerInstance":
        data = data or {}
        return cls(consumer_name=data.get("instance_id", ""), base_uri=data.get("base_uri", ""))

    def to_dict(self) -> dict:
        return {"instance_id": self.consumer_name, "base_uri": self.base_uri}


@dataclass(frozen=True)
class ConsumerOffset:
    topic: str
    partition: int
    offset: int
    metadata: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ConsumerOffset":
        return cls(
            topic=data.get("topic", ""),
            partition=data.get("partition", 0),
            offset=data.get("offset", 0),
            metadata=data.get("metadata", ""),
        )

    def to_dict(self) -> dict:
        body = {"partition": self.partition, "offset": self.offset, "topic": self.topic}
        if self.metadata:
            body["metadata"] = self.metadata
        return body


@dataclass(frozen=True)
class ConsumerOffsets:
    offsets: List[ConsumerOffset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ConsumerOffsets":
        data = data or {}
        return cls(offsets=[ConsumerOffset.from_dict(o) for o in data.get("offsets") or []])

    def to_dict(self) -> dict:
        return {"offsets": [o.to_dict() for o in self.offsets]}


@dataclass(frozen=True)
class ConsumerPartition:
    topic: str
    partition: int

    def to_dict(self) -> dict:
        return {"partition": self.partition, "topic": self.topic}


@dataclass(frozen=True)
class ConsumerPartitions:
    partitions: List[ConsumerPartition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ConsumerPartitions":
        data = data or {}
        return cls(
            partitions=[
                ConsumerPartition(topic=p.get("topic", ""), partition=p.get("partition", 0))
                for p in data.get("partitions") or []
            ]
        )

    def to_dict(self) -> dict:
        return {"partitions": [p.to_dict() for p in self.partitions]}


@dataclass(frozen=True)
class TopicList:
    """Subscription to an explicit list of topics."""

    topics: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "TopicList":
        data = data or {}
        return cls(topics=list(data.get("topics") or []))

    def to_dict(self) -> dict:
        return {"topics": list(self.topics)}


@dataclass(frozen=True)
class TopicPattern:
    """Subscription to every topic matching a regular expression."""

    topic_pattern: str

    def to_dict(self) -> dict:
        return {"topic_pattern": self.topic_pattern}


TopicSubscription = Union[TopicList, TopicPattern]


@dataclass(frozen=True)
class Message:
    """A consumed message. ``key`` and ``value`` are the decoded JSON values."""

    topic: str = ""
    key: Any = None
    value: Any = None
    partition: int = 0
    offset: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        return cls(
            topic=data.get("topic", ""),
            key=data.get("key"),
            value=data.get("value"),
            partition=data.get("partition", 0),
            offset=data.get("offset", 0),
        )

    def key_bytes(self) -> Optional[bytes]:
        """Key of a binary format message as raw bytes."""
        return decode_binary(self.key)

    def value_bytes(self) -> Optional[bytes]:
        """Value of a binary format message as raw bytes."""
        return decode_binary(self.value)

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "key": self.key,
            "value": self.value,
            "partition": self.partition,
            "offset": self.offset,
        }


@dataclass(frozen=True)
class ProducerRecord:
    """A record to produce. Without a partition the proxy chooses one."""

    value: Any
    key: Any = None
    partition: Optional[int] = None

    @classmethod
    def binary(
        cls,
        value: Optional[Union[bytes, str]],
        key: Optional[Union[bytes, str]] = None,
        partition: Optional[int] = None,
    ) -> "ProducerRecord":
        """Build a binary format record from raw bytes."""
        return cls(value=encode_binary(value), key=encode_binary(key), partition=partition)

    def to_dict(self) -> dict:
        body: Dict[str, Any] = {}
        if self.key is not None:
            body["key"] = self.key
        body["value"] = self.value
        if self.partition is not None:
            body["partition"] = self.partition
        return body


@dataclass(frozen=True)
class ProducerMessage:
    """Records to produce, with the schemas needed for Avro format."""

    records: List[ProducerRecord] = field(default_factory=list)
    key_schema: str = ""
    key_schema_id: int = 0
    value_schema: str = ""
    value_schema_id: int = 0

    def to_dict(self) -> dict:
        body: Dict[str, Any] = {}
        if self.key_schema:
            body["key_schema"] = self.key_schema
        if self.key_schema_id:
            body["key_schema_id"] = self.key_schema_id
        if self.value_schema:
            body["value_schema"] = self.value_schema
        if self.value_schema_id:
            body["value_schema_id"] = self.value_schema_id
        body["records"] = [r.to_dict() for r in self.records]
        return body


@dataclass(frozen=True)
class ProducerOffset:
    partition: int = 0
    offset: int = 0
    error_code: int = 0
    error: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ProducerOffset":
        return cls(
            partition=data.get("partition") or 0,
            offset=data.get("offset") or 0,
            error_code=data.get("error_code") or 0,
            error=data.get("error") or "",
        )

    def to_dict(self) -> dict:
        return {
            "partition": self.partition,
            "offset": self.offset,
            "error_code": self.error_code,
            "error": self.error,
        }


@dataclass(frozen=True)
class ProducerResponse:
    """Per-record outcome of a produce request, in request order."""

    offsets: List[ProducerOffset] = field(default_factory=list)
    key_schema_id: int = 0
    value_schema_id: int = 0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ProducerResponse":
        data = data or {}
        return cls(
            offsets=[ProducerOffset.from_dict(o) for o in data.get("offsets") or []],
            key_schema_id=data.get("key_schema_id") or 0,
            value_schema_id=data.get("value_schema_id") or 0,
        )

    def failures(self) -> List[ProducerOffset]:
        """Offsets of the records the proxy rejected."""
        return [o for o in self.offsets if o.error_code != 0]

    def to_dict(self) -> dict:
        return {
            "key_schema_id": self.key_schema_id,
            "value_schema_id": self.value_schema_id,
            "offsets": [o.to_dict() for o in self.offsets],
        }


@dataclass(frozen=True)
class FetchArgument:
    """Arguments shared by ``Consumers.records``, ``Consumers.messages`` and ``Consumers.poll``.

    Attributes:
        topic_name: Topic to read (API v1 only)
        consumer_name: Consumer instance name
        consumer_group: Consumer group, defaults to the collection's group
        max_bytes: Maximum bytes of keys and values per response, 0 for unlimited
        timeout: Request timeout in milliseconds for API v2, 0 for the proxy default
    """

    consumer_name: str = ""
    topic_name: str = ""
    consumer_group: str = ""
    max_bytes: int = 0
    timeout: int = 0
