"""
Prompt templates for remote event summarization.

Birthday events get celebration framing so summarization models lean warm
rather than procedural. All user text is sanitized before interpolation.
"""

from __future__ import annotations

from eventlens.config import PROMPT_DESCRIPTION_MAX_CHARS, PROMPT_TITLE_MAX_CHARS
from eventlens.utils.redaction import sanitize_for_prompt

BIRTHDAY_EVENT_TEMPLATE = """Birthday Event: {title}
Date: {date}
Description: {description}
Context: This is a birthday celebration that requires special attention and preparation."""

EVENT_TEMPLATE = """Event: {title}
Date: {date}
Description: {description}"""

BIRTHDAY_SYSTEM_INSTRUCTION = (
    "You are a helpful AI assistant that provides warm, celebratory insights for birthdays "
    "and special occasions. Be thoughtful, caring, and suggest meaningful ways to celebrate."
)
EVENT_SYSTEM_INSTRUCTION = (
    "You are a helpful AI assistant that analyzes calendar events and provides actionable "
    "insights. Be concise, practical, and professional."
)

CHAT_PROMPT_TEMPLATE = """Analyze this calendar event and provide insights:

{event_text}

Please provide a concise one-sentence summary highlighting the key purpose and importance.

Format your response as:
SUMMARY: [your summary here]"""


def build_event_text(title: str, description: str, formatted_date: str, is_birthday: bool) -> str:
    """Event block shared by the summarization and chat prompts."""
    safe_title = sanitize_for_prompt(title, max_length=PROMPT_TITLE_MAX_CHARS)
    safe_description = sanitize_for_prompt(description, max_length=PROMPT_DESCRIPTION_MAX_CHARS)

    if is_birthday:
        return BIRTHDAY_EVENT_TEMPLATE.format(
            title=safe_title,
            date=formatted_date,
            description=safe_description or "Birthday celebration",
        )
    return EVENT_TEMPLATE.format(
        title=safe_title,
        date=formatted_date,
        description=safe_description or "No additional details provided",
    )


def build_chat_prompt(event_text: str) -> str:
    return CHAT_PROMPT_TEMPLATE.format(event_text=event_text)


def system_instruction_for(is_birthday: bool) -> str:
    return BIRTHDAY_SYSTEM_INSTRUCTION if is_birthday else EVENT_SYSTEM_INSTRUCTION
