# -*- coding: utf-8 -*-
"""
Configuration from environment (.env supported).

- LOGS_DIR, LOG_LEVEL: logging destination and level
- QR_*: rendering options for the QR preview/download
- DEFAULT_<FIELD>: form pre-fill, one per contact field (e.g. DEFAULT_FIRST_NAME)
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from vcardgen.contact import ContactRecord

ERROR_CORRECTION_LEVELS = ("L", "M", "Q", "H")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class QRSettings:
    error_correction: str = "Q"
    border: int = 4
    width: int = 400
    dark: str = "#1e293b"
    light: str = "#ffffff"


@dataclass(frozen=True)
class AppConfig:
    logs_dir: Path = Path("logs")
    log_level: str = "INFO"
    qr: QRSettings = field(default_factory=QRSettings)
    defaults: ContactRecord = field(default_factory=ContactRecord)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        if env is None:
            load_dotenv()
            env = os.environ
        qr = QRSettings(
            error_correction=_ec_level(env.get("QR_ERROR_CORRECTION", "Q")),
            border=_positive_int(env, "QR_BORDER", 4, allow_zero=True),
            width=_positive_int(env, "QR_WIDTH", 400),
            dark=env.get("QR_DARK_COLOR", "#1e293b"),
            light=env.get("QR_LIGHT_COLOR", "#ffffff"),
        )
        defaults = ContactRecord.from_mapping(
            {name: env.get(f"DEFAULT_{name.upper()}", "") for name in ContactRecord.field_names()}
        )
        return cls(
            logs_dir=Path(env.get("LOGS_DIR", "logs")),
            log_level=_log_level(env.get("LOG_LEVEL", "INFO")),
            qr=qr,
            defaults=defaults,
        )


def _ec_level(raw: str) -> str:
    level = (raw or "").strip().upper()
    if level not in ERROR_CORRECTION_LEVELS:
        raise ValueError(f"QR_ERROR_CORRECTION must be one of L, M, Q, H (got {raw!r})")
    return level


def _positive_int(env: Mapping[str, str], name: str, default: int, allow_zero: bool = False) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError(f"{name} must be {'>= 0' if allow_zero else '> 0'} (got {value})")
    return value


def _log_level(raw: str) -> str:
    level = (raw or "").strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got {raw!r})")
    return level
