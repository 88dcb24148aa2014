"""HTTP entry points for the BuildSource cost estimator.

Provides JSON endpoints for:
- Listing catalog materials and historical projects
- Looking up a single material
- Producing a cost estimate for a project
"""

from typing import Any, Dict, Optional

import structlog
from flask import Flask, jsonify, request
from flask_cors import CORS

from config.errors import (
    BuildSourceError,
    ErrorCode,
    InsufficientDataError,
    MaterialNotFoundError,
    ValidationError,
)
from config.settings import Settings, settings as default_settings
from services.data_store import JsonDataStore
from services.estimate_service import EstimateService
from services.estimator_context import EstimatorContext

logger = structlog.get_logger()

SERVICE_NAME = "buildsource-estimator"

# ============================================================================
# Helper Functions
# ============================================================================


def success_response(data: Any) -> Dict[str, Any]:
    """Build success response."""
    return {"success": True, "data": data}


def error_response(code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    """Build error response."""
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }


def get_request_json() -> Dict[str, Any]:
    """Extract JSON from the current request body.

    Raises:
        ValidationError: If the body is not valid JSON.
    """
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise ValidationError(message="Invalid JSON in request body")
    return data


# ============================================================================
# App Factory
# ============================================================================


def create_app(
    context: Optional[EstimatorContext] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    """Build the Flask app around one estimator context.

    Args:
        context: Estimator context; built from the JSON data store when omitted.
        settings: Settings used to locate data and configure the regressor.
    """
    settings = settings or default_settings
    if context is None:
        context = EstimatorContext.from_data_store(JsonDataStore(settings.data_dir), settings)

    estimate_service = EstimateService(context)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app)

    app.config["ESTIMATOR_CONTEXT"] = context

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "service": SERVICE_NAME, "estimator": context.summary()})

    @app.route("/api/materials", methods=["GET"])
    def list_materials():
        materials = [material.to_api_dict() for material in context.catalog.all()]
        return jsonify(success_response(materials))

    @app.route("/api/materials/<int:material_id>", methods=["GET"])
    def get_material(material_id: int):
        material = context.catalog.lookup(material_id)
        if material is None:
            e = MaterialNotFoundError(material_id)
            return jsonify(error_response(e.code, e.message, e.details)), 404
        return jsonify(success_response(material.to_api_dict()))

    @app.route("/api/projects", methods=["GET"])
    def list_projects():
        projects = [project.model_dump(exclude_none=True) for project in context.historical_projects]
        return jsonify(success_response(projects))

    @app.route("/api/estimate", methods=["POST"])
    def estimate():
        """Estimate a project.

        Request body:
        {
            "projectType": "residential",
            "area": 1500,
            "floors": 2,
            "quality": "standard",
            "selectedMaterials": [1, 4, 7]
        }
        """
        try:
            payload = get_request_json()
            result = estimate_service.estimate(payload)
            return jsonify(success_response(result.to_api_dict()))

        except ValidationError as e:
            return jsonify(error_response(e.code, e.message, e.details)), 400
        except InsufficientDataError as e:
            logger.error("estimate_insufficient_data", error=e.message)
            return jsonify(error_response(e.code, e.message, e.details)), 503
        except BuildSourceError as e:
            logger.error("estimate_error", error=e.message, code=e.code)
            return jsonify(error_response(e.code, e.message, e.details)), 500
        except Exception as e:
            logger.exception("estimate_exception", error=str(e))
            return jsonify(error_response(
                ErrorCode.ESTIMATE_FAILED,
                "Error occurred during prediction. Please try again."
            )), 500

    return app
