"""
Logging middleware for ASCII Studio.

This module provides request/response logging middleware
for monitoring and debugging.
"""

import logging
import time
import uuid
from flask import current_app, request, g


logger = logging.getLogger(__name__)


class LoggingMiddleware:
    """Logging middleware for request/response logging."""

    @staticmethod
    def before_request():
        """Log request details."""
        g.start_time = time.time()
        g.request_id = f"req_{uuid.uuid4().hex[:12]}"

        if not current_app.config.get('LOG_REQUESTS', True):
            return

        logger.info(
            f"Request started: {g.request_id} - {request.method} {request.path} "
            f"from {request.remote_addr}"
        )

        # Prompts are user content; log only their size
        if request.method == 'POST' and request.is_json:
            data = request.get_json(silent=True)
            if isinstance(data, dict):
                prompt = data.get('prompt')
                logger.debug(
                    f"Request body: density={data.get('density')!r} "
                    f"prompt_length={len(prompt) if isinstance(prompt, str) else None}"
                )

    @staticmethod
    def after_request(response):
        """Log response details."""
        response.headers['X-Request-ID'] = getattr(g, 'request_id', 'unknown')

        if hasattr(g, 'start_time') and current_app.config.get('LOG_REQUESTS', True):
            duration = time.time() - g.start_time

            logger.info(
                f"Request completed: {g.request_id} - {response.status_code} "
                f"in {duration:.3f}s"
            )

            # Log response for errors
            if response.status_code >= 400:
                logger.warning(
                    f"Error response: {g.request_id} - {response.status_code} "
                    f"for {request.method} {request.path}"
                )

        return response
