"""Exceptions raised by srtcorrect."""


class SrtCorrectError(Exception):
    """Base class for all srtcorrect errors."""


class SubtitleParseError(SrtCorrectError):
    """The document yielded no subtitle entries."""

    def __init__(self, message: str = "Could not parse any subtitles from the file."):
        super().__init__(message)


class NoDocumentError(SrtCorrectError):
    """An operation needs a loaded document but none is loaded."""

    def __init__(self, message: str = "Please load an SRT file first."):
        super().__init__(message)


class AnalysisError(SrtCorrectError):
    """The analyzer failed (transport, auth or malformed response)."""


class AnalysisInProgressError(SrtCorrectError):
    """A second analysis was started while one is still outstanding."""

    def __init__(self, message: str = "An analysis is already in progress."):
        super().__init__(message)


class MissingCredentialError(SrtCorrectError):
    """No API key is stored for the analyzer."""


class NoSelectedErrorError(SrtCorrectError):
    """A suggestion was applied without a selected error."""

    def __init__(self, message: str = "No flagged error is selected."):
        super().__init__(message)
