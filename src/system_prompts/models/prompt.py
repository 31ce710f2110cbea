"""
System prompt entity.

A ``SystemPrompt`` is a named, tagged block of instruction text. Construction
follows a builder style: ``SystemPrompt.new(name, content)`` followed by
chained ``with_*`` calls, each of which returns a new copy.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class SystemPrompt(BaseModel):
    """
    A stored system prompt with its metadata.

    At most one prompt in a collection may have ``is_default`` set; the store
    enforces this, not the entity.
    """

    id: str = Field(description="Unique identifier (uuid4), immutable after creation")
    name: str = Field(description="Human-chosen label, not guaranteed unique")
    description: str | None = Field(default=None, description="Optional free text")
    content: str = Field(description="Prompt body")
    is_default: bool = Field(default=False, description="Whether this is the default prompt")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time (UTC)")
    updated_at: datetime = Field(default_factory=utc_now, description="Last content change (UTC)")
    tags: list[str] = Field(default_factory=list, description="Tags used for search")
    model_specific: str | None = Field(
        default=None,
        description="Model family this prompt targets (e.g. 'gpt-4', 'claude-3')",
    )

    @classmethod
    def new(cls, name: str, content: str) -> "SystemPrompt":
        """
        Create a prompt with a fresh ID and matching created/updated timestamps.

        Args:
            name: Prompt label
            content: Prompt body

        Returns:
            New non-default prompt with no description, tags or model
        """
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            content=content,
            created_at=now,
            updated_at=now,
        )

    def with_description(self, description: str) -> "SystemPrompt":
        return self.model_copy(update={"description": description}, deep=True)

    def with_tags(self, tags: list[str]) -> "SystemPrompt":
        return self.model_copy(update={"tags": list(tags)}, deep=True)

    def with_model_specific(self, model: str) -> "SystemPrompt":
        return self.model_copy(update={"model_specific": model}, deep=True)

    def set_as_default(self) -> "SystemPrompt":
        return self.model_copy(update={"is_default": True}, deep=True)

    def update_content(self, content: str) -> None:
        """Replace the body in place and refresh ``updated_at``."""
        self.content = content
        self.updated_at = utc_now()
