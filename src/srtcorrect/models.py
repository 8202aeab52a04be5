"""Data models for srtcorrect."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_SUGGESTIONS = 3


class SubtitleEntry(BaseModel):
    """A single subtitle block with its SRT timestamps and text."""

    id: int
    start_time: str  # HH:MM:SS,mmm
    end_time: str  # HH:MM:SS,mmm
    text: str

    def to_srt_block(self) -> str:
        """Convert to SRT format block (no trailing blank line)."""
        return f"{self.id}\n{self.start_time} --> {self.end_time}\n{self.text}"


class ErrorReport(BaseModel):
    """A suspect word flagged by the analyzer, as received on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    subtitle_id: int = Field(alias="subtitleId")
    original_word: str = Field(alias="originalWord", min_length=1)
    context: str
    reason: str
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("suggestions")
    @classmethod
    def _limit_suggestions(cls, value: list[str]) -> list[str]:
        return value[:MAX_SUGGESTIONS]


class PotentialError(ErrorReport):
    """An outstanding flagged error inside a review session."""

    id: str

    @classmethod
    def from_report(cls, report: ErrorReport, ordinal: int) -> "PotentialError":
        return cls(
            id=f"{report.subtitle_id}-{ordinal}",
            subtitle_id=report.subtitle_id,
            original_word=report.original_word,
            context=report.context,
            reason=report.reason,
            suggestions=list(report.suggestions),
        )
