"""
Configuration engine: load dataclass defaults first, merge INI overrides, then
apply `MESSAGEKIT_<SECTION>_<KEY>` environment overrides (a `.env` file in the
working directory is honoured). On first run, a template `config.ini` mirroring
the dataclass defaults is written so the user has something to tweak.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import asdict, fields
from configparser import ConfigParser

from dotenv import load_dotenv, find_dotenv

from messagekit.utils.cfg.schema import Config


# Paths
ROOT = Path(__file__).resolve().parent.parent.parent
INI_FILE = Path(ROOT, "config.ini")
ENV_PREFIX = "MESSAGEKIT"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


# Helpers
def _cast(template_value, raw: str):
    """Cast the raw INI/env string back to the dataclass field type."""
    t = type(template_value)
    if t is bool:
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ValueError(f"Not a boolean: {raw!r}")
    return Path(raw) if t is Path else t(raw)

def _create_config(cfg: Config, path: Path) -> None:
    """Write a template INI that mirrors the dataclass defaults."""
    cp = ConfigParser()
    for section, mapping in asdict(cfg).items():
        cp[section] = {k: str(v) for k, v in mapping.items()}
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        cp.write(f)

def _apply_env(cfg: Config, environ) -> None:
    """Override fields from `MESSAGEKIT_<SECTION>_<KEY>` variables."""
    for section in fields(cfg):
        dst = getattr(cfg, section.name)
        for item in fields(dst):
            name = f"{ENV_PREFIX}_{section.name}_{item.name}".upper()
            raw = environ.get(name)
            if raw is not None:
                setattr(dst, item.name, _cast(getattr(dst, item.name), raw))


# Public API
def load(path: Optional[Path] = None, environ=None) -> Config:
    """Load configuration from INI file and environment, return Config object."""
    cfg = Config()
    ini = path or INI_FILE

    # Create template on first run so users have something to tweak
    if not ini.exists():
        _create_config(cfg, ini)

    cp = ConfigParser()
    cp.read(ini, encoding="utf-8")

    for sect in cp.sections():
        if not hasattr(cfg, sect):
            continue
        dst = getattr(cfg, sect)
        for key, raw in cp.items(sect):
            if hasattr(dst, key):
                setattr(dst, key, _cast(getattr(dst, key), raw))

    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    _apply_env(cfg, environ)
    return cfg
