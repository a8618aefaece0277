"""
HTTP Server

Flask application exposing the review and chat operations as JSON
endpoints.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from . import __version__
from .api import ReviewOrchestrator
from .formatting.comment import CommentFormatter
from .models.review import (
    ChatRequest,
    ChatResponse,
    ReviewFilesRequest,
    ReviewResultResponse,
)


logger = logging.getLogger(__name__)


def create_app(orchestrator: Optional[ReviewOrchestrator] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        orchestrator: Review orchestrator; built from environment config when omitted

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    reviewer = orchestrator or ReviewOrchestrator()
    formatter = CommentFormatter()

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'review-service',
            'version': __version__,
            'providers': reviewer.registry.available(),
        })

    @app.route('/api/v1/reviews', methods=['POST'])
    def review_files():
        """Review files with the requested provider."""
        try:
            body = ReviewFilesRequest.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({'error': e.errors(include_url=False, include_context=False), 'status': 'invalid'}), 400

        result = reviewer.review_files(
            [f.to_domain() for f in body.files],
            body.provider,
            body.model,
            body.aspects,
        )

        response = ReviewResultResponse.model_validate(result, from_attributes=True).model_dump(by_alias=True)
        response['summaryComment'] = formatter.format_summary(result, body.provider, body.model)
        response['pullRequestComments'] = [c.to_dict() for c in formatter.format_inline(result)]
        return jsonify(response)

    @app.route('/api/v1/chat', methods=['POST'])
    def chat():
        """Send chat history to the requested provider and return its reply."""
        try:
            body = ChatRequest.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({'error': e.errors(include_url=False, include_context=False), 'status': 'invalid'}), 400

        reply = reviewer.chat(
            body.provider,
            body.model,
            [m.to_domain() for m in body.history],
            body.username,
        )
        return jsonify(ChatResponse(reply=reply).model_dump())

    return app
