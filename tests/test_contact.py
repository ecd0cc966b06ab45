import dataclasses

import pytest

from vcardgen.contact import (
    ContactRecord,
    build_vcard,
    build_vcard_bytes,
    escape_vcard_field,
    generate_vcard_filename,
)

SAMPLE = ContactRecord(
    first_name="John",
    last_name="Smith",
    title="Senior Analyst",
    organization="Department of Defense; Intelligence Division",
    mobile="+1-555-123-4567",
    dsn="312-1234",
    email="john.smith@example.gov",
    url="https://www.example.gov",
    street="1234 Main Street",
    city="Washington",
    state="DC",
    zip="20500",
    country="United States",
    notes="Available Monday-Friday\n9:00 AM - 5:00 PM EST",
)

EMPTY = ContactRecord()


def _lines(vcard: str):
    return vcard.split("\r\n")


# --- escaping ---

def test_escape_order():
    assert escape_vcard_field("a\\b") == "a\\\\b"
    assert escape_vcard_field("a;b,c") == "a\\;b\\,c"
    assert escape_vcard_field("Line 1\r\nLine 2") == "Line 1\\nLine 2"
    # backslash introduced for ';' is not escaped again
    assert escape_vcard_field("\\;") == "\\\\\\;"

def test_escape_empty_and_passthrough():
    assert escape_vcard_field("") == ""
    assert escape_vcard_field("Zoë Ærø 東京 :=") == "Zoë Ærø 東京 :="

def test_escape_removes_raw_specials():
    out = escape_vcard_field("a;b,c\nd\re\\f")
    assert "\n" not in out and "\r" not in out
    # every ';' and ',' is preceded by an odd run of backslashes
    for i, ch in enumerate(out):
        if ch in ";,":
            run = len(out[:i]) - len(out[:i].rstrip("\\"))
            assert run % 2 == 1

def test_escape_not_idempotent():
    s = "a;b"
    assert escape_vcard_field(escape_vcard_field(s)) != escape_vcard_field(s)


# --- builder ---

def test_header_and_footer():
    for rec in (SAMPLE, EMPTY):
        v = build_vcard(rec)
        assert v.startswith("BEGIN:VCARD\r\nVERSION:3.0\r\n")
        assert v.endswith("END:VCARD")
        assert not v.endswith("\r\n")

def test_empty_record_is_minimal():
    assert build_vcard(EMPTY) == "BEGIN:VCARD\r\nVERSION:3.0\r\nEND:VCARD"

def test_full_record_line_order():
    assert _lines(build_vcard(SAMPLE)) == [
        "BEGIN:VCARD",
        "VERSION:3.0",
        "FN:John Smith",
        "N:Smith;John;;;",
        "TITLE:Senior Analyst",
        "ORG:Department of Defense\\; Intelligence Division",
        "TEL;TYPE=CELL:+1-555-123-4567",
        "TEL;TYPE=WORK:312-1234",
        "EMAIL;TYPE=INTERNET:john.smith@example.gov",
        "URL:https://www.example.gov",
        "ADR;TYPE=WORK:;;1234 Main Street;Washington;DC;20500;United States",
        "NOTE:Available Monday-Friday\\n9:00 AM - 5:00 PM EST",
        "END:VCARD",
    ]

def test_special_characters():
    rec = dataclasses.replace(SAMPLE, organization="Company, Inc.; Department", notes="Line 1\nLine 2\nLine 3")
    v = build_vcard(rec)
    assert "ORG:Company\\, Inc.\\; Department" in v
    assert "NOTE:Line 1\\nLine 2\\nLine 3" in v

def test_single_name_fields():
    v = build_vcard(ContactRecord(last_name="Smith"))
    assert "FN:Smith\r\n" in v
    assert "N:Smith;;;;" in v
    v = build_vcard(ContactRecord(first_name="John"))
    assert "FN:John\r\n" in v
    assert "N:;John;;;" in v

def test_whitespace_first_name_skips_fn_keeps_n():
    lines = _lines(build_vcard(ContactRecord(first_name="   ")))
    assert not any(ln.startswith("FN:") for ln in lines)
    assert "N:;   ;;;" in lines

def test_optional_lines_omitted_when_empty():
    v = build_vcard(ContactRecord(email="a@b.c"))
    assert _lines(v) == ["BEGIN:VCARD", "VERSION:3.0", "EMAIL;TYPE=INTERNET:a@b.c", "END:VCARD"]

@pytest.mark.parametrize("field", ["street", "city", "state", "zip", "country"])
def test_adr_has_seven_components(field):
    rec = ContactRecord(**{field: "x;y"})
    adr = [ln for ln in _lines(build_vcard(rec)) if ln.startswith("ADR;TYPE=WORK:")]
    assert len(adr) == 1
    value = adr[0][len("ADR;TYPE=WORK:"):]
    parts = value.replace("\\;", "\0").split(";")
    assert len(parts) == 7
    assert parts[:2] == ["", ""]

def test_no_adr_without_address():
    assert "ADR" not in build_vcard(ContactRecord(first_name="John", notes="hi"))

def test_record_not_mutated():
    before = dataclasses.asdict(SAMPLE)
    build_vcard(SAMPLE)
    generate_vcard_filename(SAMPLE)
    assert dataclasses.asdict(SAMPLE) == before

def test_bytes_are_utf8():
    rec = ContactRecord(first_name="Іван", last_name="Петренко")
    data = build_vcard_bytes(rec)
    assert data.decode("utf-8") == build_vcard(rec)
    assert "FN:Іван Петренко" in data.decode("utf-8")


# --- record ---

def test_from_mapping():
    rec = ContactRecord.from_mapping({"first_name": "A", "notes": None, "unknown": "x"})
    assert rec.first_name == "A"
    assert rec.notes == ""
    assert rec == ContactRecord(first_name="A")

def test_field_names_order():
    names = ContactRecord.field_names()
    assert names[0] == "first_name" and names[-1] == "notes"
    assert len(names) == 14


# --- filename ---

def test_filename_basic():
    assert generate_vcard_filename(SAMPLE) == "John_Smith.vcf"

def test_filename_empty():
    assert generate_vcard_filename(EMPTY) == "contact.vcf"
    assert generate_vcard_filename(ContactRecord(first_name="  ", last_name="")) == "contact.vcf"

def test_filename_reserved_characters():
    assert generate_vcard_filename(ContactRecord(first_name="A/B:C")) == "ABC.vcf"
    assert generate_vcard_filename(ContactRecord(first_name='a*b?"c', last_name="<d>|e\\")) == 'abc_de.vcf'

def test_filename_only_last_name():
    assert generate_vcard_filename(ContactRecord(last_name="Smith")) == "Smith.vcf"

def test_filename_collapses_whitespace():
    assert generate_vcard_filename(ContactRecord(first_name="Mary  Ann", last_name="van der Berg")) == "Mary_Ann_van_der_Berg.vcf"


# --- escaping per property ---

def test_name_lines_escaped():
    lines = _lines(build_vcard(ContactRecord(first_name="A,B", last_name="C;D")))
    assert r"FN:A\,B C\;D" in lines
    assert r"N:C\;D;A\,B;;;" in lines

@pytest.mark.parametrize("field,prefix", [
    ("title", "TITLE:"),
    ("mobile", "TEL;TYPE=CELL:"),
    ("dsn", "TEL;TYPE=WORK:"),
    ("email", "EMAIL;TYPE=INTERNET:"),
    ("url", "URL:"),
])
def test_property_values_escaped(field, prefix):
    lines = _lines(build_vcard(ContactRecord(**{field: "a;b,c\\d\ne"})))
    assert prefix + r"a\;b\,c\\d\ne" in lines
