import pytest

from srtcorrect.models import ErrorReport
from srtcorrect.session import CorrectionSession

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,000
Hello wrold

2
00:00:03,000 --> 00:00:04,000
Goodbye"""


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def session() -> CorrectionSession:
    s = CorrectionSession()
    s.load_document(SAMPLE_SRT, "sample.srt")
    return s


@pytest.fixture
def wrold_report() -> ErrorReport:
    return ErrorReport(
        subtitleId=1,
        originalWord="wrold",
        context="Hello wrold",
        reason="typo",
        suggestions=["world"],
    )
