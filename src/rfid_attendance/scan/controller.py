from __future__ import annotations

import logging
import os

from flask import Flask, jsonify, request

from ..common.datetime_utils import isoformat_seconds, now_local
from ..common.messages import get_message, language_from_header
from ..core.enums import ScanOutcome
from ..core.exceptions import ConfigurationError, PersistenceError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _request_api_key(body: dict):
    return request.headers.get("X-API-Key") or request.args.get("api_key") or body.get("api_key")


def register(app: Flask, container: Container) -> None:
    def _failure(lang: str, *, error: str | None = None):
        payload = {
            "message": get_message(lang, "scan.failed"),
            "sign": int(ScanOutcome.REJECTED),
            "flag": get_message(lang, "scan.errorFlag"),
        }
        if error is not None:
            payload["error"] = error
        return jsonify(payload), 500

    @app.route("/scan", methods=["POST"], endpoint="scan")
    def scan():
        lang = language_from_header(request.headers.get("Accept-Language"))
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}

        try:
            result = container.scan_service.handle_scan(
                uid=body.get("uid"),
                device_uid=body.get("device_uid"),
                api_key=_request_api_key(body),
                lang=lang,
            )
        except ConfigurationError as e:
            return jsonify({
                "message": str(e),
                "sign": int(ScanOutcome.REJECTED),
                "flag": get_message(lang, "timeSettings.flag"),
            }), 400
        except ValidationError:
            return jsonify({
                "message": get_message(lang, "scan.missingFields"),
                "sign": int(ScanOutcome.REJECTED),
                "flag": get_message(lang, "scan.errorFlag"),
            }), 400
        except PersistenceError as e:
            return _failure(lang, error=str(e))
        except Exception:
            logger.exception("Unhandled error in POST /scan")
            return _failure(lang)

        return jsonify(result.to_dict())

    @app.route("/scan/queue", methods=["GET"], endpoint="scan_queue")
    def scan_queue():
        lang = language_from_header(request.headers.get("Accept-Language"))
        try:
            pending = container.scan_service.take_pending(request.args.get("device_uid"))
        except ValidationError:
            return jsonify({"error": get_message(lang, "scan.deviceRequired")}), 400
        except PersistenceError as e:
            logger.exception("Mailbox read failed")
            return jsonify({"error": str(e)}), 500
        return jsonify([r.to_dict() for r in pending])

    @app.route("/scan/health", methods=["GET"], endpoint="scan_health")
    def scan_health():
        db_ok = container.health_probe()
        return jsonify({
            "status": "OK" if db_ok else "DB_ERROR",
            "database": "connected" if db_ok else "disconnected",
            "timestamp": isoformat_seconds(now_local()),
            "environment": os.getenv("APP_ENV", "development"),
        }), (200 if db_ok else 500)
