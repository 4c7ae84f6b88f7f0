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

"""Pytest configuration and fixtures."""

import json
import sys
from http import HTTPStatus
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))
from kafka_rest import KafkaRest, KafkaRestConfig  # noqa: E402

BASE_URL = "http://proxy.test:8082"


def build_response(status_code=200, body=None, reason=None):
    """Build a requests.Response carrying the given body.

    ``body`` may be None (empty), bytes/str (sent verbatim) or any JSON value.
    """
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    response._content_consumed = True
    response.encoding = "utf-8"
    response.url = BASE_URL
    return response


@pytest.fixture
def config():
    """Client configuration independent of the environment."""
    return KafkaRestConfig(
        url=BASE_URL,
        timeout=5.0,
        format="binary",
        offset="largest",
        version="v1",
        log_level="WARNING",
        log_format="text",
        log_file=None,
    )


@pytest.fixture
def kafka(config):
    """Client whose HTTP session is replaced by a mock."""
    client = KafkaRest(config=config)
    client.api.session.request = MagicMock(return_value=build_response(200, {}))
    yield client
    client.close()


@pytest.fixture
def http(kafka):
    """The mocked ``session.request`` of the ``kafka`` fixture."""
    return kafka.api.session.request


def called_url(http_mock, index=-1):
    """URL of a recorded request."""
    return http_mock.call_args_list[index][0][1]


def called_method(http_mock, index=-1):
    return http_mock.call_args_list[index][0][0]


def called_body(http_mock, index=-1):
    """Decoded JSON body of a recorded request, None when there was none."""
    data = http_mock.call_args_list[index][1]["data"]
    return json.loads(data) if data is not None else None


def called_headers(http_mock, index=-1):
    return http_mock.call_args_list[index][1]["headers"]
