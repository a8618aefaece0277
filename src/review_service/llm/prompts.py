"""
Prompt Builder

Builds the instruction text sent to the model: a reviewer persona,
caller-ordered aspect sections, a mandatory rating directive and the
inline comment JSON schema. Chat mode uses a separate persona prompt.
"""

import logging
from typing import Optional, Sequence

from ..exceptions import EmptyInputError


logger = logging.getLogger(__name__)

INLINE_COMMENTS_MARKER = "### Inline Comments"

REVIEW_PREAMBLE = """You are an expert senior code reviewer with deep experience in backend and modern front-end development.
Provide feedback in two parts: general feedback and inline comments.

### General Feedback
Respond with the specified aspect sections below, in the order listed, using Markdown headings and concise bullet points.
Do NOT include any additional titles or extraneous text.
Focus exclusively on actionable feedback for each aspect.
"""

RATE_DIRECTIVE = (
    "On the next line, output ONLY a single integer between 1 and 100, with no other characters, "
    "representing the overall quality of the pull request.\n\n"
)

INLINE_COMMENTS_INSTRUCTIONS = INLINE_COMMENTS_MARKER + """
For each file, provide specific, concise comments tied to exact line numbers where improvements are needed.
Use the following JSON format for inline comments:
```json
[
  {
    "path": "file/path",
    "lineNumber": 42,
    "comment": "Short, actionable comment (1 sentence)."
  }
]
```
Ensure line numbers are accurate based on the provided file content.
If no inline comments are needed for a file, return an empty array.
"""

CHAT_PERSONA = (
    "You are a friendly and knowledgeable AI assistant named {provider}, assisting user '{username}'. "
    "Provide helpful, concise, and engaging responses. "
    "Use a conversational tone and adapt to the user's context based on the chat history."
)


class PromptBuilder:
    """
    Builds prompts for review and chat requests.

    Both builders are pure: the same arguments always produce
    byte-identical prompts.
    """

    def build_review_prompt(self, aspects: Sequence[str]) -> str:
        """
        Build the review system prompt.

        Args:
            aspects: Review focus areas, rendered as numbered headings in
                the given order

        Returns:
            Complete prompt string

        Raises:
            EmptyInputError: If no aspects are given
        """
        if not aspects:
            raise EmptyInputError("No aspects provided for review")

        logger.debug(f"Building review prompt for {len(aspects)} aspects")

        sections = [REVIEW_PREAMBLE]

        for index, aspect in enumerate(aspects, start=1):
            sections.append(f"#### {index}. {aspect}\n")

        sections.append(f"#### {len(aspects) + 1}. Rate\n")
        sections.append(RATE_DIRECTIVE)
        sections.append(INLINE_COMMENTS_INSTRUCTIONS)

        return "".join(sections)

    def build_chat_prompt(self, provider: str, username: Optional[str] = None) -> str:
        """
        Build the chat persona prompt.

        Args:
            provider: Provider name the assistant introduces itself as
            username: Identity of the user being assisted

        Returns:
            Persona prompt without rating or inline comment directives
        """
        return CHAT_PERSONA.format(provider=provider, username=username or "anonymous")

