"""Result model for a paste operation."""

from pydantic import BaseModel, Field
from typing import Literal


class PasteResult(BaseModel):
    """Outcome of one paste operation.

    mode is "append" when the markdown went into the active note and
    "import" when new notes were created, one per section.
    """

    mode: Literal["append", "import"] = Field(
        ...,
        description="Whether the paste appended to a note or created notes"
    )

    record_ids: list[str] = Field(
        default_factory=list,
        description="Ids of created notes, in section order (empty for an append)"
    )

    items_created: int = Field(
        default=0,
        ge=0,
        description="Line items created across all notes"
    )

    items_dropped: int = Field(
        default=0,
        ge=0,
        description="Lines the host refused to create"
    )

    @property
    def created_count(self) -> int:
        """Number of notes created (0 for an append)."""
        return len(self.record_ids) if self.mode == "import" else 0

    def summary(self) -> str:
        """User-facing one-line summary."""
        if self.mode == "append":
            return "Markdown pasted into current note."
        count = self.created_count
        return f"Created {count} note{'s' if count != 1 else ''} from clipboard."

    model_config = {"frozen": True}
