"""
Main Flask application for ASCII Studio.

This module creates and configures the Flask application
with all necessary middleware, blueprints, and error handlers.
"""

import logging
import os
from datetime import datetime
from flask import Flask, jsonify
from flask_cors import CORS

from .endpoints import generate_bp, health_bp
from .middleware.logging import LoggingMiddleware
from .middleware.error_handler import ErrorHandler
from ..core.models.errors import ErrorResponse
from ..core.pipeline import AsciiArtGenerator
from ..utils.config import get_config, validate_config
from ..utils.logging import setup_logging


def create_app(config_name: str = None, generator: AsciiArtGenerator = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name (development, production, testing)
        generator: Pre-built generator, mainly for tests

    Returns:
        Configured Flask application
    """
    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config = get_config(config_name)
    app.config.from_object(config)

    # Setup logging
    setup_logging(app.config)
    logger = logging.getLogger(__name__)

    for problem in validate_config(config):
        logger.warning(f"Configuration problem: {problem}")

    # Initialize extensions
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))

    # Provider configuration is read once, here
    app.extensions['ascii_generator'] = generator or AsciiArtGenerator.from_config(config)

    # Register middleware
    app.before_request(LoggingMiddleware.before_request)
    app.after_request(LoggingMiddleware.after_request)

    # Register blueprints
    app.register_blueprint(generate_bp)
    app.register_blueprint(health_bp)

    # Register error handlers
    ErrorHandler.register_handlers(app)

    # Add custom error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify(ErrorResponse(
            error="The requested resource was not found",
            error_code="NOT_FOUND"
        ).to_json()), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(ErrorResponse(
            error="The method is not allowed for the requested URL",
            error_code="METHOD_NOT_ALLOWED"
        ).to_json()), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify(ErrorResponse(
            error="An internal server error occurred",
            error_code="INTERNAL_SERVER_ERROR"
        ).to_json()), 500

    @app.route('/')
    def root():
        return jsonify({
            "service": app.config.get('API_TITLE'),
            "version": app.config.get('API_VERSION'),
            "status": "running",
            "timestamp": datetime.utcnow().isoformat(),
            "endpoints": {
                "generate": "/api/generate",
                "health": "/api/health",
                "providers": "/api/health/providers"
            }
        })

    logger.info(f"Flask application created with config: {config_name or 'default'}")

    return app


def run_app(host: str = None, port: int = None, debug: bool = None):
    """
    Run the Flask application.

    Args:
        host: Host to bind to
        port: Port to bind to
        debug: Enable debug mode
    """
    app = create_app()

    host = host or os.environ.get('HOST', '0.0.0.0')
    port = port or int(os.environ.get('PORT', '5001'))
    if debug is None:
        debug = app.config.get('DEBUG', False)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting ASCII Studio on {host}:{port}")

    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_app()
