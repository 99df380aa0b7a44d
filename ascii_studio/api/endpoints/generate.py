"""
Generation API endpoint for ASCII Studio.

This module provides the endpoint that turns a text prompt into
normalized ASCII art.
"""

import logging
import time
from flask import Blueprint, request, jsonify, current_app

from ..schemas.generate import GenerateResponseSchema


logger = logging.getLogger(__name__)

# Create blueprint
generate_bp = Blueprint('generate', __name__, url_prefix='/api')


@generate_bp.route('/generate', methods=['POST'])
def generate_ascii():
    """
    Generate ASCII art from a prompt.

    Expected JSON body:
    {
        "prompt": "What to draw",
        "density": "sparse | medium | dense (optional, default medium)"
    }

    Returns:
        {"ascii": "<art>"} on success. Failures are raised and rendered
        by the registered error handlers.
    """
    generator = current_app.extensions['ascii_generator']

    # A malformed or missing body is validated by the pipeline
    payload = request.get_json(silent=True)

    start_time = time.time()
    result = generator.run(payload)

    if not result.ok:
        raise result.error

    logger.info(
        f"Generation served by {result.provider}/{result.model} "
        f"in {time.time() - start_time:.2f}s"
    )

    return jsonify(GenerateResponseSchema(ascii=result.ascii).model_dump()), 200
