#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Streamlit app: vCard Generator
- Form with name, job, contact, web, address and notes fields
- Live QR code of the vCard 3.0 payload (re-rendered on each edit)
- Download .vcf (text/vcard) and QR .png
"""
from __future__ import annotations
import logging

import streamlit as st

from vcardgen.config import AppConfig
from vcardgen.contact import (
    VCARD_MIME,
    ContactRecord,
    build_vcard,
    build_vcard_bytes,
    generate_vcard_filename,
)
from vcardgen.qr import build_qr_png
from vcardgen.utils import ensure_dir, generate_qr_filename

APP_NAME = "vCard Generator"

# --- Boot ---
CONFIG = AppConfig.from_env()
ensure_dir(CONFIG.logs_dir)

logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[
        logging.FileHandler(CONFIG.logs_dir / "app.log", encoding="utf-8"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger("app")

# section -> (label, field)
SECTIONS = [
    ("Name", [("First Name", "first_name"), ("Last Name", "last_name")]),
    ("Job", [("Title", "title"), ("Organization (Parent; Child)", "organization")]),
    ("Contact", [("Mobile", "mobile"), ("DSN / Alternate Phone", "dsn"), ("Email", "email")]),
    ("Web", [("Website", "url")]),
    ("Address", [("Street", "street"), ("City", "city"), ("State", "state"),
                 ("ZIP", "zip"), ("Country", "country")]),
]


def _init_state() -> None:
    for name in ContactRecord.field_names():
        if name not in st.session_state:
            st.session_state[name] = getattr(CONFIG.defaults, name)


def _clear() -> None:
    for name in ContactRecord.field_names():
        st.session_state[name] = ""
    logger.info("Form cleared")


def _current_record() -> ContactRecord:
    return ContactRecord.from_mapping({n: st.session_state.get(n, "") for n in ContactRecord.field_names()})


st.set_page_config(page_title=APP_NAME, page_icon="📇", layout="wide")
_init_state()

st.title(APP_NAME)
st.caption("Create vCards with QR codes. Nothing is stored: data stays in this session.")

col_form, col_preview = st.columns(2)

with col_form:
    st.subheader("Contact Information")
    for section, items in SECTIONS:
        st.markdown(f"**{section}**")
        cols = st.columns(2)
        for i, (label, name) in enumerate(items):
            with cols[i % 2]:
                st.text_input(label, key=name)
    st.markdown("**Notes**")
    st.text_area("Notes", key="notes", height=120, label_visibility="collapsed")
    st.button("Clear", on_click=_clear)

record = _current_record()
vcard_text = build_vcard(record)

with col_preview:
    st.subheader("QR Code")
    qr_png = build_qr_png(vcard_text, CONFIG.qr)
    if qr_png is None:
        st.error("The vCard is too large for a QR code. Shorten the notes or other long fields.")
        logger.debug("QR not rendered for %s (%d chars)", generate_vcard_filename(record), len(vcard_text))
    else:
        st.image(qr_png, width=CONFIG.qr.width)

    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            label="📇 Download vCard (.vcf)",
            data=build_vcard_bytes(record),
            file_name=generate_vcard_filename(record),
            mime=VCARD_MIME,
        )
    with c2:
        st.download_button(
            label="🔳 Download QR (.png)",
            data=qr_png or b"",
            file_name=generate_qr_filename(record),
            mime="image/png",
            disabled=qr_png is None,
        )

    with st.expander("vCard preview"):
        st.code(vcard_text.replace("\r\n", "\n"), language="text")
