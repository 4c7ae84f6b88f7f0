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

"""Tests for logger module."""

import json
import logging
import threading

from kafka_rest.logger import ClientLogger, JsonFormatter, TextFormatter


def make_record(message="hello", **extra_fields):
    record = logging.LogRecord("kafka_rest", logging.INFO, "", 0, message, (), None)
    record.extra_fields = extra_fields
    return record


class TestFormatters:
    """Tests for JSON and text formatters."""

    def test_json_formatter(self):
        line = JsonFormatter("demo").format(make_record(url="http://x", status_code=200))
        entry = json.loads(line)

        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["client"] == "demo"
        assert entry["url"] == "http://x"
        assert entry["status_code"] == 200
        assert entry["timestamp"].endswith("Z")

    def test_text_formatter_appends_fields(self):
        line = TextFormatter("demo").format(make_record(count=3))

        assert "[demo] INFO kafka_rest - hello" in line
        assert line.endswith("count=3")


class TestClientLogger:
    """Tests for ClientLogger."""

    def test_structured_fields_reach_handlers(self, config, capsys):
        config.log_level = "DEBUG"
        config.log_format = "json"
        logger = ClientLogger(config)

        logger.debug("Request succeeded", method="GET")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["message"] == "Request succeeded"
        assert entry["method"] == "GET"

    def test_level_filters(self, config, capsys):
        config.log_level = "WARNING"
        logger = ClientLogger(config)

        logger.info("quiet")

        assert "quiet" not in capsys.readouterr().out

    def test_log_file(self, config, tmp_path):
        config.log_file = str(tmp_path / "client.log")
        logger = ClientLogger(config)

        logger.error("written", code=1)
        logger.close()

        assert "written" in (tmp_path / "client.log").read_text()
        assert logger.logger.handlers == []

    def test_new_logger_closes_previous_handlers(self, config, tmp_path):
        config.log_file = str(tmp_path / "client.log")
        first = ClientLogger(config)
        file_handler = next(h for h in first.logger.handlers if isinstance(h, logging.FileHandler))

        second = ClientLogger(config)

        assert file_handler.stream is None
        assert file_handler not in second.logger.handlers
        second.close()

    def test_close_leaves_other_handlers(self, config):
        first = ClientLogger(config)
        second = ClientLogger(config)

        first.close()

        assert len(second.logger.handlers) == 1
        second.close()

    def test_metrics(self, config):
        logger = ClientLogger(config)

        logger.record_request()
        logger.record_request(success=False)
        logger.record_fetched(4)
        logger.record_produced(3, failed=1)

        metrics = logger.get_metrics()
        assert metrics["requests"] == 2
        assert metrics["request_errors"] == 1
        assert metrics["messages_fetched"] == 4
        assert metrics["records_produced"] == 3
        assert metrics["produce_errors"] == 1
        assert "current_time" in metrics

    def test_metrics_from_many_threads(self, config):
        logger = ClientLogger(config)

        def work():
            for _ in range(1000):
                logger.record_request()
                logger.record_fetched(2)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        metrics = logger.get_metrics()
        assert metrics["requests"] == 8000
        assert metrics["messages_fetched"] == 16000
