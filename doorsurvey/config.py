from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .normalizer import HEIGHT_OFFSET_DIGIT, WIDTH_OFFSET_DIGIT
from .report.pdf_layout import ReportGeometry
from .report_i18n import SUPPORTED_LANGS

PROJECT_DIR = Path(__file__).resolve().parents[1]
"""Directory holding the ``doorsurvey`` package and the default ``config.yaml``."""

LOGGER = logging.getLogger(__name__)

VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_GEOMETRY_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(ReportGeometry) if not f.name.endswith("_offsets")
)

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8000},
    "report": {
        "lang": "en",
        "height_offset_digit": HEIGHT_OFFSET_DIGIT,
        "width_offset_digit": WIDTH_OFFSET_DIGIT,
        "geometry": {name: getattr(ReportGeometry(), name) for name in _GEOMETRY_FIELDS},
    },
    "logging": {"level": "INFO"},
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(slots=True)
class ServerConfig:
    host: str
    port: int

    def __post_init__(self) -> None:
        if not isinstance(self.port, int) or not (1 <= self.port <= 65535):
            raise ValueError(f"ServerConfig.port must be 1–65535, got {self.port!r}")


@dataclass(slots=True)
class ReportConfig:
    lang: str
    height_offset_digit: int
    width_offset_digit: int
    geometry: ReportGeometry

    def __post_init__(self) -> None:
        if self.lang not in SUPPORTED_LANGS:
            LOGGER.warning("report.lang=%r is not supported, using 'en'", self.lang)
            object.__setattr__(self, "lang", "en")
        for field_name in ("height_offset_digit", "width_offset_digit"):
            val = getattr(self, field_name)
            if not 0 <= val <= 9:
                clamped = max(0, min(9, val))
                LOGGER.warning(
                    "report.%s=%s is not a single digit, clamped to %s",
                    field_name,
                    val,
                    clamped,
                )
                object.__setattr__(self, field_name, clamped)


@dataclass(slots=True)
class LoggingConfig:
    level: str

    def __post_init__(self) -> None:
        level = str(self.level).upper()
        if level not in VALID_LOG_LEVELS:
            LOGGER.warning("logging.level=%r is not a valid level, using INFO", self.level)
            level = "INFO"
        object.__setattr__(self, "level", level)


@dataclass(slots=True)
class AppConfig:
    server: ServerConfig
    report: ReportConfig
    logging: LoggingConfig
    config_path: Path


def documented_default_config() -> dict[str, Any]:
    """Return runtime defaults in the shape documented by config.example.yaml."""
    return deepcopy(DEFAULT_CONFIG)


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML object at the top level.")
        return data


def _build_geometry(raw: dict[str, Any]) -> ReportGeometry:
    unknown = sorted(set(raw) - set(_GEOMETRY_FIELDS))
    if unknown:
        LOGGER.warning("Ignoring unknown report.geometry keys: %s", ", ".join(unknown))
    values: dict[str, float] = {}
    for name in _GEOMETRY_FIELDS:
        try:
            values[name] = float(raw[name])
        except (TypeError, ValueError):
            raise ValueError(
                f"report.geometry.{name} must be a number, got {raw[name]!r}"
            ) from None
    return ReportGeometry(**values)


def load_config(config_path: Path | None = None) -> AppConfig:
    path = config_path or (PROJECT_DIR / "config.yaml")
    path = path.resolve()
    override = _read_config_file(path)
    merged = _deep_merge(DEFAULT_CONFIG, override)

    server_port = int(merged["server"]["port"])
    if not 1 <= server_port <= 65535:
        raise ValueError(f"server.port must be 1-65535, got {server_port}")

    report_cfg = merged["report"]
    geometry_override = report_cfg.get("geometry") or {}
    if not isinstance(geometry_override, dict):
        raise ValueError("report.geometry must be a mapping")
    geometry_cfg = _deep_merge(DEFAULT_CONFIG["report"]["geometry"], geometry_override)

    return AppConfig(
        server=ServerConfig(
            host=str(merged["server"]["host"]),
            port=server_port,
        ),
        report=ReportConfig(
            lang=str(report_cfg.get("lang", "en")),
            height_offset_digit=int(report_cfg.get("height_offset_digit", HEIGHT_OFFSET_DIGIT)),
            width_offset_digit=int(report_cfg.get("width_offset_digit", WIDTH_OFFSET_DIGIT)),
            geometry=_build_geometry(geometry_cfg),
        ),
        logging=LoggingConfig(level=str(merged["logging"].get("level", "INFO"))),
        config_path=path,
    )
