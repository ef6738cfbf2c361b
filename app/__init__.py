"""Application factory for the Label Crop server."""

from __future__ import annotations

import importlib
from pathlib import Path

import yaml
from flask import Flask
from werkzeug.exceptions import HTTPException

from common.errors import ensure_app_error, from_http_exception
from common.logging import configure_level, get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import discover_plugins, register_plugin_blueprints

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"


def _load_yaml_config(path: Path = CONFIG_PATH) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _load_manifests(plugin_settings: dict) -> list[dict[str, str]]:
    manifests: list[dict[str, str]] = []
    for dotted in discover_plugins():
        module = importlib.import_module(dotted)
        manifest = getattr(module, "manifest", None)
        if not manifest:
            continue
        entry = dict(manifest)
        overrides = plugin_settings.get(entry.get("blueprint"), {}) or {}
        if overrides.get("summary"):
            entry["summary"] = overrides["summary"]
        manifests.append(entry)
    manifests.sort(key=lambda item: item["title"].lower())
    return manifests


def _register_error_handlers(app: Flask) -> None:
    logger = get_logger("app")

    @app.errorhandler(HTTPException)
    def http_error(error):
        return fail(from_http_exception(error))

    @app.errorhandler(Exception)
    def unhandled(error):
        logger.exception("unhandled error")
        return fail(ensure_app_error(error))


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    yaml_config = _load_yaml_config()
    site_settings = yaml_config.get("site", {}) or {}
    plugin_settings = yaml_config.get("plugins", {}) or {}

    app.config["SITE_SETTINGS"] = site_settings
    if "max_content_length_mb" in site_settings:
        try:
            max_bytes = int(float(site_settings["max_content_length_mb"]) * 1024 * 1024)
            app.config["MAX_CONTENT_LENGTH"] = max_bytes
        except (TypeError, ValueError):
            pass
    app.config["PLUGIN_SETTINGS"] = plugin_settings

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    configure_level(site_settings.get("log_level"))
    install_request_logging(app)
    app.config["PLUGIN_BLUEPRINTS"] = register_plugin_blueprints(app)
    _register_error_handlers(app)

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    app.config["PLUGIN_MANIFESTS"] = _load_manifests(plugin_settings)

    @app.route("/")
    def home():
        return ok(
            {
                "title": site_settings.get("title", "Label Crop"),
                "plugins": app.config["PLUGIN_MANIFESTS"],
            }
        )

    return app


__all__ = ["create_app"]
