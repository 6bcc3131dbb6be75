"""Parsing of the legacy plain-text response format.

A plain-text response is a list of sections, the first one being the
status record::

    STATUS=S,When=1700000000,Code=11,Msg=Summary,Description=cgminer 4.11.1|
    SUMMARY,Elapsed=3600,MHS av=13500.00,Accepted=120|

Sections are separated by ``|`` (or newlines). A backslash escapes a
separator inside a value, e.g. ``User=worker\\,1``. Firmware that never emits
``|`` uses ``;`` instead. Each section is one record of comma separated
``KEY=VALUE`` fields, optionally led by a bare tag such as ``SUMMARY``.
Empty sections and empty fields are ignored: cgminer builds differ in
where they leave trailing delimiters.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import ProtocolError

SECTION_SEPARATOR = "|"
LEGACY_SECTION_SEPARATOR = ";"
FIELD_SEPARATOR = ","
KEY_VALUE_SEPARATOR = "="
LINE_SEPARATORS = "\r\n"
ESCAPE = "\\"


@dataclass
class TextRecord:
    """One parsed section: an optional tag plus its fields in wire order."""

    tag: str = ""
    fields: dict[str, str] = field(default_factory=dict)


def split_escaped(text: str, separators: str) -> list[str]:
    """Split ``text`` on any unescaped character in ``separators``.

    Escape sequences are kept in the pieces so they can be split again;
    call :func:`unescape` once a piece is final.
    """
    parts: list[str] = []
    current: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == ESCAPE:
            current.append(ch)
            escaped = True
        elif ch in separators:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def unescape(text: str) -> str:
    """Drop the backslash from every ``\\x`` escape sequence."""
    out: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        else:
            out.append(ch)
    if escaped:
        out.append(ESCAPE)
    return "".join(out)


def split_sections(payload: str) -> list[str]:
    """Split a response payload into its non-empty sections.

    Sections keep their escape sequences; :func:`parse_record` removes them.
    """
    parts = split_escaped(payload, SECTION_SEPARATOR)
    if len(parts) > 1:
        parts = split_escaped(payload, SECTION_SEPARATOR + LINE_SEPARATORS)
    else:
        parts = split_escaped(payload, LEGACY_SECTION_SEPARATOR + LINE_SEPARATORS)
    return [p.strip() for p in parts if p.strip()]


def parse_record(section: str) -> TextRecord:
    """Parse a single ``[TAG,]KEY=VALUE,...`` section.

    cgminer escapes ``,``, ``|``, ``=`` and ``\\`` inside values with a
    backslash; keys and values are returned unescaped.

    Raises:
        ProtocolError: If a bare token appears anywhere but the first field.
    """
    record = TextRecord()
    for index, raw_field in enumerate(split_escaped(section, FIELD_SEPARATOR)):
        token = raw_field.strip()
        if not token:
            continue
        key, *rest = split_escaped(token, KEY_VALUE_SEPARATOR)
        if not rest:
            if index == 0:
                record.tag = unescape(token)
                continue
            raise ProtocolError(f"field without value: {token!r}")
        key = unescape(key.strip())
        if not key:
            raise ProtocolError(f"field without key: {token!r}")
        value = KEY_VALUE_SEPARATOR.join(rest)
        record.fields[key] = unescape(value.strip())
    return record


def parse_sections(payload: str) -> list[TextRecord]:
    """Parse every section of a plain-text payload.

    Raises:
        ProtocolError: If the payload is empty or a section is malformed.
    """
    sections = split_sections(payload)
    if not sections:
        raise ProtocolError("empty response")
    return [parse_record(section) for section in sections]


def parse_status_record(record: TextRecord) -> dict[str, str]:
    """Validate the leading status record and return its fields.

    Raises:
        ProtocolError: If the ``STATUS`` or ``Msg`` field is missing.
    """
    fields = record.fields
    if "STATUS" not in fields:
        raise ProtocolError("missing status section")
    if "Msg" not in fields:
        raise ProtocolError("status section has no Msg field")
    return fields
