"""Correction session: subtitle sequence, flagged errors and the edit target."""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .errors import (
    AnalysisInProgressError,
    NoDocumentError,
    NoSelectedErrorError,
    SubtitleParseError,
)
from .models import ErrorReport, PotentialError, SubtitleEntry
from .srt import export_filename, parse_srt, subtitles_to_srt


class SessionStatus(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class AnalysisTicket:
    """Handle for one analysis request, tagged with the document version."""

    version: int
    text: str


@dataclass
class EditTarget:
    """The single entry currently open for editing."""

    subtitle_id: int
    buffer: str
    error: PotentialError | None = None


class CorrectionSession:
    """Holds one subtitle document and drives its review.

    Entries are mutated in place by id; flagged errors are keyed by their
    synthesized id. At most one entry is targeted for editing at a time.
    """

    def __init__(self) -> None:
        self.subtitles: list[SubtitleEntry] = []
        self.errors: dict[str, PotentialError] = {}
        self.target: EditTarget | None = None
        self.status = SessionStatus.IDLE
        self.error_message = ""
        self.file_name = ""
        self.version = 0
        self._pending: AnalysisTicket | None = None

    # Document

    def load_document(self, raw: str, file_name: str = "") -> list[SubtitleEntry]:
        """Replace the document with the parsed contents of ``raw``.

        Raises SubtitleParseError, leaving the session untouched, when
        nothing could be parsed.
        """
        entries = parse_srt(raw)
        if not entries:
            raise SubtitleParseError()

        self.subtitles = entries
        self.errors = {}
        self.target = None
        self.error_message = ""
        self.file_name = file_name
        self.version += 1
        if self._pending is None:
            self.status = SessionStatus.IDLE

        logging.info(f"Loaded {len(entries)} subtitles from {file_name or 'document'}")
        return entries

    @property
    def has_document(self) -> bool:
        return bool(self.subtitles)

    def entry(self, subtitle_id: int) -> SubtitleEntry:
        for sub in self.subtitles:
            if sub.id == subtitle_id:
                return sub
        raise KeyError(subtitle_id)

    def export(self) -> str:
        """Serialize the current (possibly edited) subtitles."""
        return subtitles_to_srt(self.subtitles)

    @property
    def export_filename(self) -> str:
        return export_filename(self.file_name)

    # Analysis

    @property
    def analyzing(self) -> bool:
        return self._pending is not None

    def begin_analysis(self) -> AnalysisTicket:
        """Enter the analyzing state and return the request ticket."""
        if not self.has_document:
            raise NoDocumentError()
        if self._pending is not None:
            raise AnalysisInProgressError()

        self.error_message = ""
        self.status = SessionStatus.ANALYZING
        self._pending = AnalysisTicket(version=self.version, text=self.export())
        return self._pending

    def apply_analysis_results(
        self,
        reports: list[ErrorReport],
        ticket: AnalysisTicket | None = None,
    ) -> bool:
        """Replace the outstanding errors with a new batch.

        Returns False, discarding the batch, when ``ticket`` belongs to a
        document that has since been replaced.
        """
        if ticket is not None and ticket.version != self.version:
            logging.warning(
                f"Discarding {len(reports)} results for superseded document "
                f"version {ticket.version} (current {self.version})"
            )
            return False

        known_ids = {sub.id for sub in self.subtitles}
        errors = {}
        for ordinal, report in enumerate(reports):
            if report.subtitle_id not in known_ids:
                logging.warning(
                    f"Dropping flagged word {report.original_word!r} for "
                    f"unknown subtitle {report.subtitle_id}"
                )
                continue
            error = PotentialError.from_report(report, ordinal)
            errors[error.id] = error

        self.errors = errors
        if self.target and self.target.error is not None:
            self.target = None
        return True

    def end_analysis(self, error_message: str | None = None) -> None:
        """Leave the analyzing state, recording a failure if one occurred."""
        superseded = self._pending is not None and self._pending.version != self.version
        self._pending = None
        if superseded:
            self.status = SessionStatus.IDLE
        elif error_message:
            self.error_message = error_message
            self.status = SessionStatus.ERROR
        else:
            self.status = SessionStatus.READY

    def errors_for(self, subtitle_id: int) -> list[PotentialError]:
        return [err for err in self.errors.values() if err.subtitle_id == subtitle_id]

    def prune_orphaned_errors(self) -> int:
        """Drop errors whose subtitle no longer exists. Returns the count."""
        known_ids = {sub.id for sub in self.subtitles}
        orphaned = [
            err_id
            for err_id, err in self.errors.items()
            if err.subtitle_id not in known_ids
        ]
        for err_id in orphaned:
            del self.errors[err_id]
        return len(orphaned)

    # Editing

    @property
    def selected_error(self) -> PotentialError | None:
        return self.target.error if self.target else None

    @property
    def edit_buffer(self) -> str:
        return self.target.buffer if self.target else ""

    def select_target(self, subtitle_id: int) -> EditTarget:
        """Open an entry for editing.

        The first outstanding error for the entry, if any, becomes the
        selected error. Re-selecting the active target keeps its buffer.
        """
        if self.target and self.target.subtitle_id == subtitle_id:
            return self.target

        entry = self.entry(subtitle_id)
        flagged = self.errors_for(subtitle_id)
        self.target = EditTarget(
            subtitle_id=subtitle_id,
            buffer=entry.text,
            error=flagged[0] if flagged else None,
        )
        return self.target

    def select_error(self, error_id: str) -> EditTarget:
        """Open the entry a flagged error points at, with that error selected."""
        error = self.errors[error_id]
        if self.target and self.target.subtitle_id == error.subtitle_id:
            self.target.error = error
            return self.target

        entry = self.entry(error.subtitle_id)
        self.target = EditTarget(subtitle_id=entry.id, buffer=entry.text, error=error)
        return self.target

    def update_edit_buffer(self, text: str) -> None:
        if self.target:
            self.target.buffer = text

    def save_edit(self) -> SubtitleEntry | None:
        """Commit the edit buffer and resolve the selected error."""
        if not self.target:
            return None

        target = self.target
        entry = self.entry(target.subtitle_id)
        entry.text = target.buffer
        if target.error:
            self.errors.pop(target.error.id, None)
        self.target = None
        return entry

    def cancel_edit(self) -> None:
        self.target = None

    def ignore_error(self, error_id: str | None = None) -> bool:
        """Dismiss a flagged error without touching the subtitle text.

        Defaults to the selected error. Returns False when the error is no
        longer outstanding.
        """
        if error_id is None:
            if not self.selected_error:
                return False
            error_id = self.selected_error.id

        if self.selected_error and self.selected_error.id == error_id:
            self.target = None
        return self.errors.pop(error_id, None) is not None

    def contains_flagged_word(self) -> bool:
        """Whether the selected error's word still occurs in the edit buffer."""
        error = self.selected_error
        if error is None or not error.original_word:
            return False
        return re.search(re.escape(error.original_word), self.target.buffer, re.IGNORECASE) is not None

    def apply_suggestion(self, suggestion: str) -> str:
        """Replace the first case-insensitive match of the flagged word in the buffer."""
        error = self.selected_error
        if error is None:
            raise NoSelectedErrorError()
        if not error.original_word:
            return self.target.buffer

        pattern = re.compile(re.escape(error.original_word), re.IGNORECASE)
        self.target.buffer = pattern.sub(lambda _: suggestion, self.target.buffer, count=1)
        return self.target.buffer
