"""Plugin discovery and blueprint registration."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterator

from flask import Blueprint, Flask

from common.logging import get_logger

ROOT = Path(__file__).resolve().parent.parent

logger = get_logger("app.blueprints")


def discover_plugins(package: str = "plugins") -> Iterator[str]:
    """Yield the dotted path of every plugin package under ``package``."""

    package_path = ROOT / package
    if not package_path.is_dir():
        return
    for module_info in sorted(pkgutil.iter_modules([str(package_path)]), key=lambda m: m.name):
        if module_info.ispkg:
            yield f"{package}.{module_info.name}"


def plugin_blueprints(dotted: str) -> list[Blueprint]:
    """Return the blueprints exported by ``<plugin>.api``.

    A plugin without an ``api`` module contributes no routes. Import errors
    raised inside an existing ``api`` module propagate.
    """

    name = f"{dotted}.api"
    try:
        module = importlib.import_module(name)
    except ModuleNotFoundError as exc:
        if exc.name != name:
            raise
        logger.debug("%s has no api module", dotted)
        return []
    exported = getattr(module, "blueprints", None) or []
    invalid = [item for item in exported if not isinstance(item, Blueprint)]
    if invalid:
        raise TypeError(f"{name}.blueprints must only hold Blueprint objects")
    return list(exported)


def register_plugin_blueprints(app: Flask, package: str = "plugins") -> list[str]:
    """Register every plugin blueprint on ``app`` and return their names."""

    registered: list[str] = []
    for dotted in discover_plugins(package):
        for bp in plugin_blueprints(dotted):
            app.register_blueprint(bp)
            logger.info("registered %s at %s", bp.name, bp.url_prefix or "/")
            registered.append(bp.name)
    return registered


__all__ = ["discover_plugins", "plugin_blueprints", "register_plugin_blueprints"]
