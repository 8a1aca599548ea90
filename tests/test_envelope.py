"""Tests for envelope decoding and task status parsing."""

import json

import pytest

from src.runninghub.envelope import (
    EnvelopeError,
    decode_envelope,
    parse_output_items,
    parse_task_id,
    parse_task_status,
)
from src.runninghub.schemas import JobStatus


def _raw(document) -> bytes:
    return json.dumps(document).encode("utf-8")


class TestDecodeEnvelope:
    """Test decode_envelope."""

    def test_success_envelope(self):
        envelope = decode_envelope(_raw({"code": 0, "msg": "success", "data": "RUNNING"}))
        assert envelope.code == 0
        assert envelope.msg == "success"
        assert envelope.data == "RUNNING"

    def test_extra_fields_ignored(self):
        envelope = decode_envelope(
            _raw({"code": 0, "msg": "ok", "data": None, "errorMessages": ["x"]})
        )
        assert envelope.data is None

    def test_malformed_json(self):
        with pytest.raises(EnvelopeError):
            decode_envelope(b"{not json")

    def test_not_an_object(self):
        with pytest.raises(EnvelopeError):
            decode_envelope(_raw(["SUCCESS"]))

    def test_missing_code(self):
        with pytest.raises(EnvelopeError):
            decode_envelope(_raw({"msg": "success", "data": "SUCCESS"}))

    def test_nonzero_code(self):
        with pytest.raises(EnvelopeError, match="code=804"):
            decode_envelope(_raw({"code": 804, "msg": "APIKEY_INVALID", "data": None}))


class TestParseTaskStatus:
    """Test the string-or-object status decoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("SUCCESS", JobStatus.SUCCEEDED),
            ("RUNNING", JobStatus.RUNNING),
            ("FAILED", JobStatus.FAILED),
            ("QUEUED", JobStatus.QUEUED),
        ],
    )
    def test_bare_string(self, value, expected):
        assert parse_task_status(value) == expected

    def test_nested_object(self):
        assert parse_task_status({"taskStatus": "SUCCESS", "taskId": "t"}) == JobStatus.SUCCEEDED

    @pytest.mark.parametrize("value", ["", "success", "PAUSED", "UNKNOWN"])
    def test_unrecognized_string_is_unknown(self, value):
        assert parse_task_status(value) == JobStatus.UNKNOWN

    @pytest.mark.parametrize(
        "data",
        [
            None,
            {},
            {"status": "SUCCESS"},
            {"taskStatus": 3},
            {"taskStatus": None},
            ["SUCCESS"],
            42,
        ],
    )
    def test_malformed_data_is_unknown(self, data):
        assert parse_task_status(data) == JobStatus.UNKNOWN

    def test_unknown_is_not_terminal(self):
        assert not JobStatus.UNKNOWN.is_terminal
        assert JobStatus.SUCCEEDED.is_terminal
        assert JobStatus.FAILED.is_terminal


class TestParseTaskId:
    """Test taskId extraction from create responses."""

    def test_present(self):
        assert parse_task_id({"taskId": "1900", "taskStatus": "RUNNING"}) == "1900"

    @pytest.mark.parametrize("data", [None, "RUNNING", {}, {"taskId": ""}, {"taskId": 12}])
    def test_absent_or_malformed(self, data):
        assert parse_task_id(data) == ""


class TestParseOutputItems:
    """Test outputs list parsing."""

    def test_items_in_order(self):
        items = parse_output_items([
            {"fileUrl": "https://f/1.txt", "fileType": "txt", "nodeId": "9", "taskCostTime": "18"},
            {"fileUrl": "https://f/2.png", "fileType": "png"},
        ])
        assert [i.file_url for i in items] == ["https://f/1.txt", "https://f/2.png"]
        assert items[0].node_id == "9"
        assert items[1].node_id == ""

    def test_missing_fields_default_to_empty(self):
        items = parse_output_items([{}])
        assert items[0].file_url == ""
        assert items[0].file_type == ""

    def test_empty_list(self):
        assert parse_output_items([]) == []

    @pytest.mark.parametrize("data", [None, "SUCCESS", {"fileUrl": "x"}, ["x"]])
    def test_malformed(self, data):
        with pytest.raises(EnvelopeError):
            parse_output_items(data)
