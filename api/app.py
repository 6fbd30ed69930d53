"""Flask REST API exposing the expense tracker services."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from expense_core.exceptions import RangeError, RecordNotFoundError, StorageError, ValidationError
from expense_core.formatting import ACTIVITY_ICONS, CATEGORY_DISPLAY, category_display, format_currency
from expense_core.services import ExpenseStore
from expense_core.storage import JSONStorage
from expense_core.validators import ACTIVITIES, ALL_CATEGORIES, CATEGORIES, validate_date


def create_app(data_dir: Optional[Path] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    data_dir = data_dir or os.getenv("EXPENSE_TRACKER_DATA_DIR", "data")
    store = ExpenseStore(JSONStorage(Path(data_dir)))

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(RangeError)
    def handle_range_error(exc: RangeError):
        return _handle_error(exc, 422, "Report range error")

    @app.errorhandler(StorageError)
    def handle_storage_error(exc: StorageError):
        return _handle_error(exc, 500, "Storage error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/meta")
    def meta():
        return _success({
            "categories": [
                {"name": name, **CATEGORY_DISPLAY[name].to_dict()} for name in CATEGORIES
            ],
            "allCategories": {"name": ALL_CATEGORIES, **category_display(ALL_CATEGORIES).to_dict()},
            "activities": [{"name": name, "icon": ACTIVITY_ICONS[name]} for name in ACTIVITIES],
        })

    @app.get("/expenses")
    def list_expenses():
        expenses = store.query(
            request.args.get("category") or ALL_CATEGORIES,
            request.args.get("search", ""),
        )
        total = store.total(expenses)
        return _success({
            "items": [expense.to_dict() for expense in expenses],
            "total": f"{total:.2f}",
            "formattedTotal": format_currency(total),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        expense = store.add(payload)
        return _success(expense.to_dict(), 201)

    @app.get("/expenses/<int:expense_id>")
    def get_expense(expense_id: int):
        expense = store.get(expense_id)
        return _success(expense.to_dict())

    @app.put("/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        payload = _json_body()
        expense = store.update(expense_id, payload)
        return _success(expense.to_dict())

    @app.delete("/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        store.remove(expense_id)
        return _success({}, 204)

    @app.get("/profile")
    def get_profile():
        return _success(store.profile.to_dict())

    @app.put("/profile")
    def update_profile():
        payload = _json_body()
        profile = store.set_profile(payload)
        return _success(profile.to_dict())

    @app.get("/reports")
    def export_report():
        start = validate_date(request.args.get("start"), "start")
        end = validate_date(request.args.get("end"), "end")
        report = store.report(start, end)
        app.logger.info("Generated report %s with %d expenses", report.filename, report.expense_count)
        return Response(
            report.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={report.filename}"},
        )

    return app
