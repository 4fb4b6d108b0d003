"""SpeakCheck: speech quality reports from recorded audio."""

__version__ = "1.0.0"
