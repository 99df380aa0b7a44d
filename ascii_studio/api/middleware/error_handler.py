"""
Error handling middleware for ASCII Studio.

This module provides centralized error handling and
response formatting for the API.
"""

import logging
from flask import jsonify, g
from werkzeug.exceptions import HTTPException

from ...core.models.errors import (
    AsciiStudioError,
    ErrorResponse,
    ValidationError,
    ConfigurationError,
    LLMError
)


logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling for the API."""

    @staticmethod
    def register_handlers(app):
        """Register error handlers with Flask app."""

        @app.errorhandler(ValidationError)
        def handle_validation_error(error):
            return ErrorHandler.handle_validation_error(error)

        @app.errorhandler(ConfigurationError)
        def handle_configuration_error(error):
            return ErrorHandler.handle_configuration_error(error)

        @app.errorhandler(LLMError)
        def handle_llm_error(error):
            return ErrorHandler.handle_llm_error(error)

        @app.errorhandler(AsciiStudioError)
        def handle_service_error(error):
            return ErrorHandler.render(error)

        @app.errorhandler(Exception)
        def handle_generic_error(error):
            return ErrorHandler.handle_generic_error(error)

    @staticmethod
    def render(error: AsciiStudioError):
        """Render a service error with its own HTTP status."""
        return jsonify(ErrorResponse.from_exception(error).to_json()), error.status_code

    @staticmethod
    def handle_validation_error(error: ValidationError):
        """Handle validation errors."""
        logger.warning(f"Validation error on '{error.field}': {error.message}")
        return ErrorHandler.render(error)

    @staticmethod
    def handle_configuration_error(error: ConfigurationError):
        """Handle configuration errors."""
        logger.error(f"Configuration error: {error.message}")
        return ErrorHandler.render(error)

    @staticmethod
    def handle_llm_error(error: LLMError):
        """Handle classified provider errors."""
        logger.error(
            f"LLM error ({error.kind}) from {error.provider}/{error.model}: "
            f"{error.raw_message or error.message}"
        )
        return ErrorHandler.render(error)

    @staticmethod
    def handle_generic_error(error: Exception):
        """Handle generic errors."""
        if isinstance(error, HTTPException):
            return jsonify(ErrorResponse(
                error=error.description or error.name,
                error_code=error.name.upper().replace(" ", "_")
            ).to_json()), error.code

        request_id = getattr(g, 'request_id', 'unknown')

        logger.error(
            f"Unhandled error in request {request_id}: {str(error)}",
            exc_info=True
        )

        return jsonify(ErrorResponse(
            error="Failed to generate ASCII art",
            error_code="INTERNAL_SERVER_ERROR",
            kind=type(error).__name__
        ).to_json()), 500
