"""
Health check endpoints for ASCII Studio.

This module provides health check and provider status endpoints
for the service.
"""

import logging
from datetime import datetime
from flask import Blueprint, jsonify, current_app

from ..schemas.generate import ProviderStatusSchema
from ...integrations.llm import configured_providers


logger = logging.getLogger(__name__)

# Create blueprint
health_bp = Blueprint('health', __name__, url_prefix='/api')


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        Service liveness, name and version
    """
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": current_app.config.get("API_VERSION"),
        "service": current_app.config.get("API_TITLE")
    }), 200


@health_bp.route('/health/providers', methods=['GET'])
def providers_check():
    """
    Configured providers in priority order.

    Returns:
        Provider names and candidate models, 503 when none is configured
    """
    generator = current_app.extensions['ascii_generator']
    providers = [
        ProviderStatusSchema.from_spec(spec).model_dump()
        for spec in configured_providers(generator.orchestrator.providers)
    ]

    if not providers:
        logger.warning("Provider check: no LLM provider is configured")

    return jsonify({
        "status": "ready" if providers else "not_configured",
        "timestamp": datetime.utcnow().isoformat(),
        "providers": providers,
        "retry": generator.orchestrator.retry_handler.get_retry_stats()
    }), 200 if providers else 503
