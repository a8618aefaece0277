#!/usr/bin/env python3
"""
AI Review Service Server

Runs the Flask server exposing review and chat endpoints.
"""

import os

from review_service.server import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.getenv("PORT", "8000"))

    print("Starting AI Review Service...")
    print(f"Server will be available at: http://localhost:{port}")
    print("API Endpoints:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Review Files: POST /api/v1/reviews")
    print("   - Chat: POST /api/v1/chat")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=os.getenv("DEBUG", "false").lower() == "true"
    )
