# -*- coding: utf-8 -*-
from __future__ import annotations
from pathlib import Path

from vcardgen.contact import ContactRecord, generate_vcard_filename

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def generate_qr_filename(record: ContactRecord) -> str:
    """John_Smith.vcf -> John_Smith_qr.png"""
    stem = generate_vcard_filename(record)[: -len(".vcf")]
    return f"{stem}_qr.png"
