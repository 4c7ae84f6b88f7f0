"""
Consumer group operations.

Every instance-level call targets /consumers/{group}/instances/{name}/...;
the group is taken from the call when given, else from the collection.
"""

from typing import TYPE_CHECKING, Callable, List, Optional

from kafka_rest.config import Version
from kafka_rest.errors import MissingArgumentError
from kafka_rest.models import (
    ConsumerInstance,
    ConsumerOffsets,
    ConsumerPartitions,
    ConsumerRequest,
    FetchArgument,
    Message,
    TopicList,
    TopicPattern,
    TopicSubscription,
)
from kafka_rest.poller import Poller

if TYPE_CHECKING:
    from kafka_rest.client import KafkaRest


class Consumers:
    """Client for the /consumers resource of one (default) consumer group."""

    def __init__(self, kafka: "KafkaRest", consumer_group: Optional[str] = None):
        self.kafka = kafka
        self.consumer_group = consumer_group or ""

    def _group(self, consumer_group: Optional[str]) -> str:
        if consumer_group:
            return consumer_group
        if self.consumer_group:
            return self.consumer_group
        raise MissingArgumentError("Error: empty consumer_group")

    def _instance(self, consumer_name: str, consumer_group: Optional[str], *path: str) -> list:
        group = self._group(consumer_group)
        if not consumer_name:
            raise MissingArgumentError("Error: empty consumer_name")
        return ["consumers", group, "instances", consumer_name, *path]

    def new_consumer(
        self,
        consumer_request: Optional[ConsumerRequest] = None,
        consumer_group: Optional[str] = None,
    ) -> ConsumerInstance:
        """Create a consumer instance in the group.

        Without a request, one is built from the configured format and
        offset reset policy, with auto commit enabled and a proxy-chosen name.
        """
        group = self._group(consumer_group)
        if consumer_request is None:
            consumer_request = ConsumerRequest(
                format=self.kafka.config.format,
                offset=self.kafka.config.offset,
            )

        data = self.kafka.api.request("POST", ["consumers", group], body=consumer_request.to_dict())
        instance = ConsumerInstance.from_dict(data)

        self.kafka.logger.info(
            "Consumer instance created",
            consumer_group=group,
            consumer_name=instance.consumer_name,
        )
        return instance

    def delete_consumer(self, consumer_name: str, consumer_group: Optional[str] = None) -> None:
        """Destroy the consumer instance."""
        self.kafka.api.request(
            "DELETE",
            self._instance(consumer_name, consumer_group),
            expected_status=204,
            send_content_type=True,
        )
        self.kafka.logger.info("Consumer instance deleted", consumer_name=consumer_name)

    def commit_offsets(
        self,
        consumer_offsets: ConsumerOffsets,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Commit a list of offsets for the consumer."""
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "offsets"),
            body=consumer_offsets.to_dict(),
        )

    def offsets(
        self,
        partitions: ConsumerPartitions,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> ConsumerOffsets:
        """Get the last committed offsets for the given partitions."""
        data = self.kafka.api.request(
            "GET",
            self._instance(consumer_name, consumer_group, "offsets"),
            body=partitions.to_dict(),
            send_content_type=False,
        )
        return ConsumerOffsets.from_dict(data)

    def subscribe(
        self,
        subscription: TopicSubscription,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Subscribe to a list of topics or to a topic pattern.

        Args:
            subscription: Either a TopicList or a TopicPattern
        """
        if not isinstance(subscription, (TopicList, TopicPattern)):
            raise TypeError(
                f"subscription must be TopicList or TopicPattern, got {type(subscription).__name__}"
            )
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "subscription"),
            body=subscription.to_dict(),
            expected_status=204,
        )

    def subscriptions(self, consumer_name: str, consumer_group: Optional[str] = None) -> TopicList:
        """Get the currently subscribed topics."""
        data = self.kafka.api.request(
            "GET", self._instance(consumer_name, consumer_group, "subscription")
        )
        return TopicList.from_dict(data)

    def unsubscribe(self, consumer_name: str, consumer_group: Optional[str] = None) -> None:
        """Unsubscribe from all currently subscribed topics."""
        self.kafka.api.request(
            "DELETE",
            self._instance(consumer_name, consumer_group, "subscription"),
            expected_status=204,
        )

    def assign(
        self,
        partitions: ConsumerPartitions,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Manually assign partitions to the consumer."""
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "assignments"),
            body=partitions.to_dict(),
            expected_status=204,
        )

    def assignments(
        self, consumer_name: str, consumer_group: Optional[str] = None
    ) -> ConsumerPartitions:
        """Get the partitions manually assigned to the consumer."""
        data = self.kafka.api.request(
            "GET", self._instance(consumer_name, consumer_group, "assignments")
        )
        return ConsumerPartitions.from_dict(data)

    def seek(
        self,
        consumer_offsets: ConsumerOffsets,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Override the offsets the next fetch will start from."""
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "positions"),
            body=consumer_offsets.to_dict(),
            expected_status=204,
        )

    def seek_to_beginning(
        self,
        partitions: ConsumerPartitions,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Seek to the first offset of each given partition."""
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "positions", "beginning"),
            body=partitions.to_dict(),
            expected_status=204,
        )

    def seek_to_end(
        self,
        partitions: ConsumerPartitions,
        consumer_name: str,
        consumer_group: Optional[str] = None,
    ) -> None:
        """Seek to the last offset of each given partition."""
        self.kafka.api.request(
            "POST",
            self._instance(consumer_name, consumer_group, "positions", "end"),
            body=partitions.to_dict(),
            expected_status=204,
        )

    def records(self, argument: FetchArgument) -> List[Message]:
        """Fetch records for the subscribed topics or assigned partitions (API v2).

        ``argument.timeout`` (ms) and ``argument.max_bytes`` are sent only
        when non-zero.
        """
        segments = self._instance(argument.consumer_name, argument.consumer_group, "records")

        params = {}
        if argument.timeout:
            params["timeout"] = argument.timeout
        if argument.max_bytes:
            params["max_bytes"] = argument.max_bytes

        data = self.kafka.api.request("GET", segments, params=params or None)
        return self._messages(data, argument)

    def messages(self, argument: FetchArgument) -> List[Message]:
        """Consume messages from ``argument.topic_name`` (API v1)."""
        segments = self._instance(argument.consumer_name, argument.consumer_group)
        if not argument.topic_name:
            raise MissingArgumentError("Error: empty topic_name")
        segments += ["topics", argument.topic_name]

        params = {"max_bytes": argument.max_bytes} if argument.max_bytes else None

        data = self.kafka.api.request("GET", segments, params=params)
        return self._messages(data, argument)

    def _messages(self, data: Optional[list], argument: FetchArgument) -> List[Message]:
        messages = [Message.from_dict(m) for m in data or []]
        self.kafka.logger.record_fetched(len(messages))
        self.kafka.logger.debug(
            "Fetched messages",
            consumer_name=argument.consumer_name,
            count=len(messages),
        )
        return messages

    def fetch(self, argument: FetchArgument) -> List[Message]:
        """Fetch with the call matching the configured API version."""
        if self.kafka.config.version == Version.V1.value:
            return self.messages(argument)
        return self.records(argument)

    def poll(
        self,
        interval: float,
        argument: FetchArgument,
        handler: Callable[[Optional[Exception], Optional[List[Message]]], None],
    ) -> Poller:
        """Keep fetching messages every ``interval`` seconds on a background thread.

        ``handler(None, messages)`` receives each batch, possibly empty.
        The first fetch error is passed as ``handler(error, None)`` and ends
        the loop. The returned poller is the cancellation handle: call it
        once to stop polling.
        """
        poller = Poller(interval, lambda: self.fetch(argument), handler, self.kafka.logger)
        poller.start()
        return poller
