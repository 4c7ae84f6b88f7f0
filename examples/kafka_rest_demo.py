#!/usr/bin/env python3
# Copyright 2025 AstroLab Software
# Author: Farid MAMAN and improved by IA
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
End-to-end walk through the Kafka REST client against a running proxy.

Lists brokers, topics and partitions, produces two binary records, then
polls them back with a temporary consumer instance.
"""

import argparse
import logging
import sys
import time

from kafka_rest import (
    FetchArgument,
    KafkaRestError,
    ProducerMessage,
    ProducerRecord,
    dumps,
    new,
    set_url,
    smallest_offset,
)

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def on_messages(error, messages):
    """Print each polled batch."""
    if error is not None:
        logger.error(f"Polling stopped: {error}")
        return
    logger.info(f"Polled {len(messages)} message(s)")
    for message in messages:
        print(dumps(message))


def run_demo(url: str, topic_name: str, consumer_group: str, poll_seconds: float) -> None:
    with new(set_url(url), smallest_offset) as k:
        print(k.config)
        print(dumps(k.broker()))

        topics = k.new_topics()
        for name in topics.names():
            print(name)

        topic = topics.topic(topic_name)
        print(topic.name, topic.configs)

        partitions = topics.new_partitions(topic)
        for partition in partitions.partitions():
            print(dumps(partition))

        message = ProducerMessage(
            records=[ProducerRecord.binary(b"kafka", key=b"v5"), ProducerRecord.binary(b"go")]
        )
        print(dumps(partitions.produce(0, message)))

        consumers = k.new_consumers(consumer_group)
        instance = consumers.new_consumer()
        print(dumps(instance))

        argument = FetchArgument(
            consumer_name=instance.consumer_name,
            topic_name=topic_name,
        )
        try:
            poller = consumers.poll(1.0, argument, on_messages)
            time.sleep(poll_seconds)
            poller()
            poller.join()
        finally:
            consumers.delete_consumer(instance.consumer_name)


def main():
    parser = argparse.ArgumentParser(description="Exercise a Kafka REST proxy end to end")
    parser.add_argument(
        "--url", default="http://localhost:8082", help="Proxy URL (default: http://localhost:8082)"
    )
    parser.add_argument("--topic", default="kafka-topic", help="Topic name (default: kafka-topic)")
    parser.add_argument(
        "--group", default="consumer-group", help="Consumer group (default: consumer-group)"
    )
    parser.add_argument(
        "--poll-seconds",
        type=float,
        default=10.0,
        help="How long to poll before cancelling (default: 10)",
    )

    args = parser.parse_args()

    try:
        run_demo(args.url, args.topic, args.group, args.poll_seconds)
    except KafkaRestError as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
