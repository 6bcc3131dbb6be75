"""Tests for the plain-text response parser."""

import pytest

from cgminer_api.errors import ProtocolError
from cgminer_api.protocol.parser import (
    parse_record,
    parse_sections,
    parse_status_record,
    split_escaped,
    split_sections,
    unescape,
)

SUMMARY_RESPONSE = (
    "STATUS=S,When=1700000000,Code=11,Msg=Summary,Description=cgminer 4.11.1|"
    "SUMMARY,Elapsed=3600,MHS av=13500.00,Accepted=120|"
)


def test_split_on_pipe():
    """Pipe separated sections; the trailing empty section is dropped."""
    sections = split_sections(SUMMARY_RESPONSE)
    assert len(sections) == 2
    assert sections[1].startswith("SUMMARY")


def test_split_on_semicolon_for_legacy_firmware():
    """Without any pipe, semicolons separate the sections."""
    sections = split_sections("STATUS=S,Msg=ok;POOL=0,URL=a;POOL=1,URL=b;")
    assert sections == ["STATUS=S,Msg=ok", "POOL=0,URL=a", "POOL=1,URL=b"]


def test_split_on_newlines():
    sections = split_sections("STATUS=S,Msg=ok|\nPOOL=0,URL=a|\n")
    assert sections == ["STATUS=S,Msg=ok", "POOL=0,URL=a"]


def test_trailing_field_separator_is_ignored():
    """A trailing comma does not change the decoded record."""
    assert parse_record("A=1,B=2,") == parse_record("A=1,B=2")


def test_embedded_empty_fields_are_ignored():
    record = parse_record("A=1,,B=2, ,")
    assert record.fields == {"A": "1", "B": "2"}


def test_leading_tag():
    """A leading bare token is kept as the record tag."""
    record = parse_record("SUMMARY,Elapsed=3600,MHS av=13500.00")
    assert record.tag == "SUMMARY"
    assert record.fields == {"Elapsed": "3600", "MHS av": "13500.00"}


def test_value_may_contain_separator_char():
    """Only the first '=' separates key and value."""
    record = parse_record("URL=stratum+tcp://pool:3333/?a=b")
    assert record.fields["URL"] == "stratum+tcp://pool:3333/?a=b"


def test_bare_token_after_first_field_is_rejected():
    with pytest.raises(ProtocolError):
        parse_record("A=1,garbage,B=2")


def test_field_without_key_is_rejected():
    with pytest.raises(ProtocolError):
        parse_record("A=1,=2")


def test_empty_payload_is_rejected():
    with pytest.raises(ProtocolError):
        parse_sections("  |  \n")


def test_parse_sections_preserves_order():
    records = parse_sections("STATUS=S,Msg=ok|POOL=0|POOL=1|POOL=2|")
    assert [r.fields.get("POOL") for r in records[1:]] == ["0", "1", "2"]


def test_status_record_fields():
    records = parse_sections(SUMMARY_RESPONSE)
    fields = parse_status_record(records[0])
    assert fields["STATUS"] == "S"
    assert fields["Msg"] == "Summary"


def test_status_record_missing_status():
    record = parse_record("SUMMARY,Elapsed=1")
    with pytest.raises(ProtocolError, match="missing status section"):
        parse_status_record(record)


def test_status_record_missing_message():
    with pytest.raises(ProtocolError):
        parse_status_record(parse_record("STATUS=S,Code=11"))


def test_escaped_comma_stays_in_value():
    """A backslash-escaped comma is part of the value, not a field break."""
    record = parse_record("POOL=0,User=worker\\,1,Status=Alive")
    assert record.fields == {"POOL": "0", "User": "worker,1", "Status": "Alive"}


def test_escaped_pipe_does_not_split_section():
    sections = split_sections("STATUS=S,Msg=ok|POOL=0,User=a\\|b|")
    assert len(sections) == 2
    assert parse_record(sections[1]).fields["User"] == "a|b"


def test_escaped_equals_and_backslash():
    record = parse_record("Msg=a\\=b,Path=C:\\\\miner")
    assert record.fields == {"Msg": "a=b", "Path": "C:\\miner"}


def test_escaped_pipe_only_payload_uses_legacy_split():
    """Only unescaped pipes select the pipe delimiter."""
    sections = split_sections("STATUS=S,Msg=a\\|b;POOL=0")
    assert sections == ["STATUS=S,Msg=a\\|b", "POOL=0"]


def test_split_escaped_keeps_escapes():
    assert split_escaped("a\\,b,c", ",") == ["a\\,b", "c"]
    assert unescape("a\\,b") == "a,b"
    assert unescape("trailing\\") == "trailing\\"
