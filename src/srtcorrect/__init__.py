"""Interactive AI-assisted spelling correction for SRT subtitles."""

__version__ = "0.1.0"
