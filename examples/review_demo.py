#!/usr/bin/env python3
"""
Review Demo

Sends local files to a configured AI provider and prints the narrative,
the rating and the inline comments, followed by the rendered summary
comment.

Usage:
    python examples/review_demo.py <provider> <file> [<file> ...]

Example:
    CHATGPT_API_KEY=sk-... python examples/review_demo.py chatgpt src/review_service/api.py
"""

import sys
import os
import logging
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from review_service.api import ReviewOrchestrator
from review_service.formatting import CommentFormatter
from review_service.models.review import FileData


ASPECTS = [
    "Code Quality",
    "Security Considerations",
    "Performance",
]


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main():
    """Main demo function."""
    setup_logging()

    if len(sys.argv) < 3:
        print("Usage: python review_demo.py <provider> <file> [<file> ...]")
        print("Example: python review_demo.py gemini src/review_service/api.py")
        sys.exit(1)

    provider_name = sys.argv[1]
    files = [
        FileData(path=path, content=Path(path).read_text(encoding='utf-8'))
        for path in sys.argv[2:]
    ]

    orchestrator = ReviewOrchestrator()
    print(f"🔍 Reviewing {len(files)} files with {provider_name}")
    print(f"   Available providers: {', '.join(orchestrator.registry.available()) or 'none'}")

    result = orchestrator.review_files(files, provider_name, "", ASPECTS)

    print("\n📝 Narrative:")
    print(result.narrative)
    print(f"\n⭐ Rating: {result.rating}/100")

    print(f"\n💬 Inline Comments: {len(result.inline_comments)}")
    for comment in result.inline_comments:
        print(f"   - {comment.path}:{comment.line_number} {comment.comment}")

    print("\n📨 Summary comment:")
    print(CommentFormatter().format_summary(result, provider_name))


if __name__ == '__main__':
    main()
