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

"""Tests for client module."""

import logging
from unittest.mock import patch

from conftest import BASE_URL, build_response, called_method, called_url
from kafka_rest import Broker, Consumers, KafkaRest, Topics, new, set_url


class TestBroker:
    """Tests for broker()."""

    def test_broker_lists_ids(self, kafka, http):
        http.return_value = build_response(200, {"brokers": [1, 2, 3]})

        broker = kafka.broker()

        assert broker == Broker(brokers=[1, 2, 3])
        assert called_method(http) == "GET"
        assert called_url(http) == f"{BASE_URL}/brokers"

    def test_empty_body_is_zero_value(self, kafka, http):
        http.return_value = build_response(200)
        assert kafka.broker() == Broker(brokers=[])


class TestFactories:
    """Tests for the resource client factories."""

    def test_new_topics(self, kafka):
        topics = kafka.new_topics()
        assert isinstance(topics, Topics)
        assert topics.kafka is kafka

    def test_new_consumers_with_group(self, kafka):
        consumers = kafka.new_consumers("group-a")
        assert isinstance(consumers, Consumers)
        assert consumers.consumer_group == "group-a"

    def test_new_consumers_without_group(self, kafka):
        assert kafka.new_consumers().consumer_group == ""

    def test_new_applies_options(self, config):
        with patch("kafka_rest.client.KafkaRestConfig", return_value=config):
            client = new(set_url("http://other:8082"))
        try:
            assert isinstance(client, KafkaRest)
            assert client.config.url == "http://other:8082"
        finally:
            client.close()


def test_context_manager_closes(config):
    client = KafkaRest(config=config)
    with patch.object(client.api, "close") as mock_close:
        with client as entered:
            assert entered is client
    mock_close.assert_called_once()


def test_close_releases_log_file(config, tmp_path):
    config.log_level = "INFO"
    config.log_file = str(tmp_path / "client.log")
    client = KafkaRest(config=config)
    file_handler = next(
        h for h in client.logger.logger.handlers if isinstance(h, logging.FileHandler)
    )

    client.close()

    assert file_handler.stream is None
    assert "Client metrics" in (tmp_path / "client.log").read_text()
