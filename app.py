"""
Request-to-Form Flask Application

A small web application showing how route params, query strings and form
submissions are parsed and validated against request schemas.

Validation errors raised by the parsing entry points are turned into 422
responses by an error handler; the search endpoint uses the safe variant and
branches on the result instead.
"""

import logging
from datetime import datetime

from flask import Flask, jsonify, request
from pydantic import ValidationError

from config.settings import settings
from parsers import bracket_array_parser
from schemas import SchemaValidationError, StructuredError
from schemas.requests import SearchQuery, SignupForm, UserParams
from services import parse_form, parse_params, parse_query_safe

# Configure logging
_handlers: list = [logging.StreamHandler()]
if settings.LOG_FILE:
    _handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = settings.MAX_CONTENT_LENGTH


@app.route("/users/<user_id>", methods=["GET"])
async def get_user(user_id: str):
    """
    Look up a user by route param, with an optional ``age`` query param.

    Returns:
        JSON: The validated params
    """
    logger.info("User lookup for %s", user_id)
    params = {**request.args.to_dict(), **request.view_args}
    user = await parse_params(params, UserParams)
    return jsonify(user.model_dump())


@app.route("/search", methods=["GET"])
async def search():
    """
    Validate a search query. Tags may be sent as ``tags[]=a&tags[]=b``.

    Returns:
        JSON: The validated query, or the issues with status 422
    """
    result = await parse_query_safe(request, SearchQuery, parser=bracket_array_parser)
    if not result.success:
        logger.warning("Invalid search query: %s", result.error.field_errors())
        return jsonify(result.error.to_dict()), 422

    return jsonify(result.data.model_dump())


@app.route("/signup", methods=["POST"])
async def signup():
    """
    Validate a multipart signup form.

    Expected form data:
        - id, age, consent (checkbox), friends (repeatable)
        - avatar: optional file upload

    Returns:
        JSON: The validated form with the avatar filename
    """
    form = await parse_form(request, SignupForm)
    logger.info("Signup accepted for %s", form.id)
    return jsonify(
        {
            "id": form.id,
            "age": form.age,
            "consent": form.consent,
            "friends": form.friends,
            "avatar": form.avatar.filename if form.avatar else None,
        }
    )


@app.route("/health", methods=["GET"])
def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        JSON: Application health status
    """
    return jsonify(
        {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": "1.0.0",
            "app_settings": {
                "log_level": settings.LOG_LEVEL,
                "include_uploaded_files": settings.INCLUDE_UPLOADED_FILES,
            },
        }
    )


# Error handlers
@app.errorhandler(ValidationError)
@app.errorhandler(SchemaValidationError)
def validation_error(error):
    """Handle validation errors raised by the parsing entry points."""
    structured = StructuredError.from_exception(error)
    logger.warning(
        "Validation failed for %s %s: %s",
        request.method,
        request.path,
        structured.field_errors(),
    )
    return jsonify(structured.to_dict()), 422


@app.errorhandler(404)
def not_found_error(_error):
    """Handle 404 errors."""
    logger.warning("404 error: %s", request.url)
    return jsonify({"error": "Endpoint not found"}), 404


@app.errorhandler(405)
def method_not_allowed_error(_error):
    """Handle 405 errors."""
    logger.warning("405 error: %s %s", request.method, request.url)
    return jsonify({"error": "Method not allowed"}), 405


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error("500 error: %s", str(error))
    return jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
    logger.info("Starting Request-to-Form application")
    logger.info("Configuration loaded from: %s", "environment variables")
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
