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

"""Tests for models and serializers modules."""

import json

import pytest

from kafka_rest import (
    Broker,
    ConsumerInstance,
    ConsumerOffset,
    Message,
    ProducerMessage,
    ProducerRecord,
    ProducerResponse,
    Topic,
    dumps,
)
from kafka_rest.errors import SchemaError
from kafka_rest.serializers import (
    decode_binary,
    encode_binary,
    parse_avro_schema,
    validate_avro_records,
)


class TestZeroValues:
    """An empty response body decodes to a zero value."""

    def test_broker(self):
        assert Broker.from_dict(None) == Broker()

    def test_topic(self):
        topic = Topic.from_dict(None)
        assert topic.name == ""
        assert topic.partitions == []

    def test_consumer_instance(self):
        assert ConsumerInstance.from_dict(None) == ConsumerInstance("", "")

    def test_producer_response(self):
        response = ProducerResponse.from_dict(None)
        assert response.offsets == []
        assert response.failures() == []


class TestEncoding:
    """Tests for request body encoding."""

    def test_record_omits_unset_fields(self):
        assert ProducerRecord("v").to_dict() == {"value": "v"}

    def test_record_keeps_partition_zero(self):
        assert ProducerRecord("v", key="k", partition=0).to_dict() == {
            "key": "k",
            "value": "v",
            "partition": 0,
        }

    def test_record_null_value(self):
        assert ProducerRecord(None).to_dict() == {"value": None}

    def test_message_omits_unset_schemas(self):
        message = ProducerMessage(records=[ProducerRecord(1)], key_schema='"string"')
        assert message.to_dict() == {"key_schema": '"string"', "records": [{"value": 1}]}

    def test_consumer_offset_metadata(self):
        assert "metadata" not in ConsumerOffset("t", 0, 1).to_dict()
        assert ConsumerOffset("t", 0, 1, metadata="m").to_dict()["metadata"] == "m"


class TestBinary:
    """Tests for base64 helpers."""

    def test_encode_bytes_and_text(self):
        assert encode_binary(b"kafka") == "a2Fma2E="
        assert encode_binary("go") == "Z28="
        assert encode_binary(None) is None

    def test_decode(self):
        assert decode_binary("a2Fma2E=") == b"kafka"
        assert decode_binary(None) is None

    def test_binary_record(self):
        record = ProducerRecord.binary(b"go", key="v5", partition=1)
        assert record.to_dict() == {"key": "djU=", "value": "Z28=", "partition": 1}

    def test_message_bytes(self):
        message = Message(key=None, value="Z28=")
        assert message.key_bytes() is None
        assert message.value_bytes() == b"go"


class TestAvroSchema:
    """Tests for parse_avro_schema and validate_avro_records."""

    def test_primitive_schema(self):
        assert parse_avro_schema('"string"') == "string"

    def test_record_schema(self):
        schema = parse_avro_schema(
            '{"type": "record", "name": "User", "fields": [{"name": "id", "type": "long"}]}'
        )
        assert schema["name"] == "User"

    @pytest.mark.parametrize("schema", ["not json", '{"type": "nonsense"}'])
    def test_invalid_schema(self, schema):
        with pytest.raises(SchemaError, match="Invalid Avro schema"):
            parse_avro_schema(schema)

    def test_records_match_schema(self):
        schema = '{"type": "record", "name": "User", "fields": [{"name": "id", "type": "int"}]}'
        validate_avro_records(schema, [{"id": 1}, {"id": 2}])

    def test_record_mismatch_names_index(self):
        schema = '{"type": "record", "name": "User", "fields": [{"name": "id", "type": "int"}]}'
        with pytest.raises(SchemaError, match="Record 1 does not match"):
            validate_avro_records(schema, [{"id": 1}, {"id": "not-an-int"}])


class TestDumps:
    """Tests for dumps."""

    def test_model(self):
        assert json.loads(dumps(Broker(brokers=[1, 2]))) == {"brokers": [1, 2]}

    def test_list_of_models(self):
        rendered = dumps([Message(topic="t", offset=1)])
        assert json.loads(rendered)[0]["offset"] == 1
        assert "\n  " in rendered
