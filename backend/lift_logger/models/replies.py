"""Render instructions handed to the chat presentation layer."""

from enum import Enum

from pydantic import BaseModel, Field


class ReplyKind(str, Enum):
    """What the presentation layer should do with a reply."""

    TEXT = "text"
    SUGGESTIONS = "suggestions"
    PLAN_FORM = "plan_form"


class Reply(BaseModel):
    """A single render instruction for the requesting channel."""

    kind: ReplyKind = ReplyKind.TEXT
    text: str = ""
    suggestions: list[str] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def message(cls, text: str) -> "Reply":
        return cls(kind=ReplyKind.TEXT, text=text)

    @classmethod
    def error(cls, text: str) -> "Reply":
        return cls(kind=ReplyKind.TEXT, text=text, is_error=True)

    @classmethod
    def choices(cls, suggestions: list[str]) -> "Reply":
        return cls(kind=ReplyKind.SUGGESTIONS, suggestions=suggestions)

    @classmethod
    def plan_form(cls, prompt: str) -> "Reply":
        return cls(kind=ReplyKind.PLAN_FORM, text=prompt)
