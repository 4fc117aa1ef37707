"""Flask application exposing tariffs and stay quotes."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, redirect, request, url_for

from kennelboard.boarding.pricing import LEGACY_FIELD_NAMES, Tariffs
from kennelboard.boarding.system import BoardingSystem, ValidationError
from kennelboard.config import Settings
from kennelboard.observability import configure_logging

TARIFF_FIELDS = set(Tariffs.field_names()) | set(LEGACY_FIELD_NAMES)


def _tariff_changes_from_request() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return {key: value for key, value in payload.items() if key in TARIFF_FIELDS}
    changes: dict[str, Any] = {}
    for key, raw in request.form.items():
        if key not in TARIFF_FIELDS or raw == "":
            continue
        try:
            changes[key] = float(raw)
        except ValueError as exc:
            raise ValidationError(f"{key} must be a number") from exc
    return changes


def _dog_count_from_request() -> int:
    raw = request.args.get("dogs", "1")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError("dogs must be a whole number") from exc


def create_app(
    database_path: str | None = None,
    settings: Settings | None = None,
) -> Flask:
    """Create and configure the Flask application."""

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key

    system = BoardingSystem(database_path or settings.database_path)
    app.extensions["boarding_system"] = system

    @app.errorhandler(ValidationError)
    def validation_failed(exc: ValidationError) -> Any:
        app.logger.info("Rejected request to %s: %s", request.path, exc)
        return jsonify({"error": str(exc)}), 400

    @app.get("/")
    def index() -> Any:
        return redirect(url_for("prices"))

    @app.get("/prices")
    def prices() -> Any:
        return jsonify(system.get_tariffs().as_dict())

    @app.post("/prices")
    def update_prices() -> Any:
        tariffs = system.update_tariffs(**_tariff_changes_from_request())
        return jsonify(tariffs.as_dict())

    @app.post("/prices/reset")
    def reset_prices() -> Any:
        return jsonify(system.reset_tariffs().as_dict())

    @app.get("/quote")
    def quote() -> Any:
        return jsonify(
            system.quote_stay(
                check_in=request.args.get("check_in"),
                check_out=request.args.get("check_out"),
                dog_count=_dog_count_from_request(),
            )
        )

    return app


__all__ = ["create_app"]
