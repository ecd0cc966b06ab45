# -*- coding: utf-8 -*-
from __future__ import annotations
import re
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Tuple

VCARD_MIME = "text/vcard;charset=utf-8"
CRLF = "\r\n"

_FILENAME_RESERVED = re.compile(r'[/\\:*?"<>|]')
_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class ContactRecord:
    """Contact fields collected from the form. Empty string means absent."""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    organization: str = ""  # "Parent; Child" is display-only, escaped like any text
    mobile: str = ""
    dsn: str = ""  # secondary / alternate phone
    email: str = ""
    url: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    notes: str = ""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContactRecord":
        """Build a record from form state; unknown keys are ignored, None becomes ""."""
        values = {}
        for name in cls.field_names():
            v = data.get(name)
            values[name] = "" if v is None else str(v)
        return cls(**values)

    def address_parts(self) -> Tuple[str, str, str, str, str]:
        return (self.street, self.city, self.state, self.zip, self.country)

    def has_address(self) -> bool:
        return any(self.address_parts())


def escape_vcard_field(value: str) -> str:
    """Escape a text value for a vCard 3.0 property (RFC 2426 section 4)."""
    if not value:
        return ""
    out = value.replace("\\", "\\\\")
    out = out.replace(";", "\\;")
    out = out.replace(",", "\\,")
    out = out.replace("\n", "\\n")
    return out.replace("\r", "")


def build_vcard(record: ContactRecord) -> str:
    """Build a vCard 3.0 string, CRLF separated, no trailing CRLF after END."""
    esc = escape_vcard_field
    lines: List[str] = [
        "BEGIN:VCARD",
        "VERSION:3.0",
    ]

    full_name = f"{record.first_name} {record.last_name}".strip()
    if full_name:
        lines.append(f"FN:{esc(full_name)}")

    # N: Family;Given;Additional;Prefix;Suffix
    if record.last_name or record.first_name:
        lines.append(f"N:{esc(record.last_name)};{esc(record.first_name)};;;")

    if record.title:
        lines.append(f"TITLE:{esc(record.title)}")
    if record.organization:
        lines.append(f"ORG:{esc(record.organization)}")
    if record.mobile:
        lines.append(f"TEL;TYPE=CELL:{esc(record.mobile)}")
    if record.dsn:
        lines.append(f"TEL;TYPE=WORK:{esc(record.dsn)}")
    if record.email:
        lines.append(f"EMAIL;TYPE=INTERNET:{esc(record.email)}")
    if record.url:
        lines.append(f"URL:{esc(record.url)}")

    # ADR: PO box;extended;street;city;region;postal code;country
    if record.has_address():
        adr = ";".join(["", ""] + [esc(p) for p in record.address_parts()])
        lines.append(f"ADR;TYPE=WORK:{adr}")

    if record.notes:
        lines.append(f"NOTE:{esc(record.notes)}")

    lines.append("END:VCARD")
    return CRLF.join(lines)


def build_vcard_bytes(record: ContactRecord) -> bytes:
    """UTF-8 payload for a text/vcard download."""
    return build_vcard(record).encode("utf-8")


def generate_vcard_filename(record: ContactRecord) -> str:
    name = f"{record.first_name}_{record.last_name}".strip()
    name = _WHITESPACE_RUN.sub("_", name)
    name = _FILENAME_RESERVED.sub("", name)
    name = name.strip("_")
    return f"{name}.vcf" if name else "contact.vcf"
