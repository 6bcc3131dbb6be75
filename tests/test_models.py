"""Tests for typed record decoding and the record models."""

from dataclasses import dataclass, field

import pytest

from cgminer_api.errors import APIError, DecodeError, ProtocolError
from cgminer_api.models import Device, Pool, Response, Summary, Version
from cgminer_api.models.base import decode_record
from cgminer_api.models.status import parse_status


@dataclass
class Sample:
    name: str = field(metadata={"key": "Name"})
    count: int = field(default=0, metadata={"key": "Count"})
    rate: float = field(default=0.0, metadata={"key": "Rate"})
    enabled: bool = field(default=False, metadata={"key": "Enabled"})
    temp: float | None = field(default=None, metadata={"key": "Temp"})


def test_text_values_are_converted():
    """Plain-text values convert to the declared field types."""
    record = decode_record(
        Sample,
        {"Name": "ASC0", "Count": "12", "Rate": "100.5", "Enabled": "Y", "Temp": "65.25"},
    )
    assert record == Sample(name="ASC0", count=12, rate=100.5, enabled=True, temp=65.25)


def test_json_values_are_converted():
    record = decode_record(
        Sample, {"Name": "ASC0", "Count": 12, "Rate": 100, "Enabled": False}
    )
    assert record.rate == 100.0
    assert isinstance(record.rate, float)
    assert record.enabled is False


def test_missing_optional_fields_keep_defaults():
    record = decode_record(Sample, {"Name": "ASC0", "Unknown": "ignored"})
    assert record.count == 0
    assert record.temp is None


def test_missing_required_field():
    with pytest.raises(DecodeError) as excinfo:
        decode_record(Sample, {"Count": "1"})
    assert excinfo.value.field == "name"
    assert excinfo.value.key == "Name"


def test_bad_number_names_field_key_and_value():
    """Conversion failures are reported, never silently defaulted."""
    with pytest.raises(DecodeError) as excinfo:
        decode_record(Sample, {"Name": "ASC0", "Count": "twelve"})
    err = excinfo.value
    assert (err.field, err.key, err.value) == ("count", "Count", "twelve")
    assert isinstance(err.cause, ValueError)


def test_bad_boolean():
    with pytest.raises(DecodeError):
        decode_record(Sample, {"Name": "ASC0", "Enabled": "maybe"})


def test_structured_value_into_scalar_field():
    with pytest.raises(DecodeError):
        decode_record(Sample, {"Name": {"nested": True}})
    with pytest.raises(DecodeError):
        decode_record(Sample, {"Name": "x", "Rate": [1, 2]})


def test_fractional_float_into_int_field():
    with pytest.raises(DecodeError):
        decode_record(Sample, {"Name": "x", "Count": 1.5})
    assert decode_record(Sample, {"Name": "x", "Count": 2.0}).count == 2


def test_dict_record_type_keeps_raw_record():
    raw = {"ID": "BTM0", "frequency": "650"}
    assert decode_record(dict, raw) == raw


def test_response_load_preserves_order():
    out = Response(Pool)
    out.load([{"POOL": 0, "URL": "a"}, {"POOL": 1, "URL": "b"}])
    assert [p.url for p in out] == ["a", "b"]
    assert out.first.index == 0
    assert len(out) == 2


def test_response_load_is_all_or_nothing():
    """A failing record leaves previously loaded records untouched."""
    out = Response(Pool)
    out.load([{"POOL": 0}])
    with pytest.raises(DecodeError):
        out.load([{"POOL": 1}, {"POOL": "bad"}])
    assert [p.index for p in out] == [0]


def test_summary_hashrate_ghs():
    assert Summary(mhs_5s=13500.0).hashrate_ghs == 13.5
    assert Summary(ghs_5s=14000.0).hashrate_ghs == 14000.0


def test_device_index_and_flags():
    device = decode_record(Device, {"ASC": 1, "Enabled": "Y", "Status": "Alive"})
    assert device.index == 1
    assert device.enabled
    assert device.alive


def test_version_software():
    assert Version(cgminer="4.11.1").software == "cgminer 4.11.1"
    assert Version(bmminer="2.0.0").software == "bmminer 2.0.0"


def test_parse_status():
    status = parse_status({"STATUS": "E", "Code": "14", "Msg": "Invalid command"})
    assert status.failed
    assert status.code == 14
    with pytest.raises(APIError) as excinfo:
        status.raise_for_status()
    assert excinfo.value.code == 14
    assert excinfo.value.description == "Invalid command"


def test_parse_status_malformed():
    with pytest.raises(ProtocolError):
        parse_status({"STATUS": "S", "Msg": "ok", "Code": "eleven"})
