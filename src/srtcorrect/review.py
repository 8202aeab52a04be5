"""Drive one analysis pass over a correction session."""

import logging
from dataclasses import dataclass
from typing import Protocol

from .credentials import CredentialStore
from .errors import MissingCredentialError, NoDocumentError
from .models import ErrorReport
from .session import CorrectionSession

NO_ISSUES_MESSAGE = "No issues found."


class Analyzer(Protocol):
    requires_credential: bool

    def find_errors(self, srt_content: str, api_key: str | None = None) -> list[ErrorReport]: ...


@dataclass
class AnalysisOutcome:
    """Result of one analysis pass."""

    errors_found: int
    stale: bool = False

    @property
    def message(self) -> str:
        if self.stale:
            return "The document changed during analysis; results were discarded."
        if self.errors_found == 0:
            return NO_ISSUES_MESSAGE
        return f"Found {self.errors_found} possible error(s)."


def run_analysis(
    session: CorrectionSession,
    analyzer: Analyzer,
    credentials: CredentialStore | None = None,
) -> AnalysisOutcome:
    """Analyze the session's current document and merge the flagged errors.

    Raises MissingCredentialError when the analyzer needs an API key and
    none is stored, and re-raises AnalysisError after recording it on the
    session. The subtitle text is never changed here.
    """
    if not session.has_document:
        raise NoDocumentError()

    api_key = None
    if analyzer.requires_credential:
        if credentials is None or not credentials.has():
            raise MissingCredentialError("No API key is configured for the analyzer.")
        api_key = credentials.get()

    ticket = session.begin_analysis()
    try:
        reports = analyzer.find_errors(ticket.text, api_key)
    except Exception as e:
        session.end_analysis(str(e))
        raise

    applied = session.apply_analysis_results(reports, ticket)
    session.end_analysis()
    if not applied:
        return AnalysisOutcome(errors_found=0, stale=True)

    logging.info(f"Analysis complete: {len(session.errors)} outstanding errors")
    return AnalysisOutcome(errors_found=len(session.errors))
