"""
Config Loader
=============
Loads configuration from configs/config.yaml with support for:
- Logging settings (level)
- Allocator settings (search node budget)
- Catalog location

Environment overrides (a .env file is honoured):
- CHECKOUT_CONFIG: explicit config file path
- CHECKOUT_LOG_LEVEL: overrides logging.level
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "configs")


@dataclass
class LoggingConf:
    """Console logging settings"""
    level: str = "info"  # "silent", "error", "warning", "info", "debug"


@dataclass
class AllocatorConf:
    """Exact-fill search settings"""
    max_nodes: Optional[int] = 200000  # None = unbounded


@dataclass
class CatalogConf:
    """Master data location"""
    path: str = os.path.join(CONFIG_DIR, "catalog.yaml")


@dataclass
class Cfg:
    """Main configuration container"""
    logging: LoggingConf = field(default_factory=LoggingConf)
    allocator: AllocatorConf = field(default_factory=AllocatorConf)
    catalog: CatalogConf = field(default_factory=CatalogConf)
    source: Optional[str] = None


def _resolve_path(path: str, config_path: str) -> str:
    """Relative paths in the config file are relative to that file."""
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(os.path.dirname(os.path.abspath(config_path)), path))


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Loads configuration from YAML file.

    Searches for config in multiple locations:
    1. explicit path / CHECKOUT_CONFIG
    2. configs/config.yaml (relative to working dir)
    3. config.yaml (relative to working dir)
    4. configs/config.yaml (relative to this file)
    """
    load_dotenv()

    explicit = path or os.getenv("CHECKOUT_CONFIG")
    if explicit:
        if not os.path.exists(explicit):
            raise FileNotFoundError(f"Config file not found: {explicit}")
        config_paths = [explicit]
    else:
        config_paths = [
            "configs/config.yaml",
            "config.yaml",
            os.path.join(CONFIG_DIR, "config.yaml"),
        ]

    config_path = None
    for candidate in config_paths:
        if os.path.exists(candidate):
            config_path = candidate
            break

    if not config_path:
        raise FileNotFoundError(f"Config file not found in: {config_paths}")

    with open(config_path, "r", encoding="utf-8") as f:
        y = yaml.safe_load(f) or {}

    # Parse sections
    logging_section = y.get("logging", {}) or {}
    allocator = y.get("allocator", {}) or {}
    catalog = y.get("catalog", {}) or {}

    max_nodes = allocator.get("max_nodes", AllocatorConf.max_nodes)
    catalog_path = catalog.get("path")

    return Cfg(
        logging=LoggingConf(
            level=os.getenv("CHECKOUT_LOG_LEVEL") or logging_section.get("level", "info"),
        ),
        allocator=AllocatorConf(
            max_nodes=int(max_nodes) if max_nodes is not None else None,
        ),
        catalog=CatalogConf(
            path=_resolve_path(catalog_path, config_path) if catalog_path else CatalogConf.path,
        ),
        source=config_path,
    )


def print_config_summary(cfg: Cfg):
    """Prints a summary of loaded configuration"""
    print("\n" + "=" * 60)
    print("📋 Configuration Summary")
    print("=" * 60)
    print(f"  Config file:      {cfg.source}")
    print(f"  Log level:        {cfg.logging.level.upper()}")
    print(f"  Max search nodes: {cfg.allocator.max_nodes if cfg.allocator.max_nodes is not None else 'unbounded'}")
    print(f"  Catalog:          {cfg.catalog.path}")
    print("=" * 60 + "\n")
