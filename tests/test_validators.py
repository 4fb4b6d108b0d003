"""Tests for upload validation helpers."""
import pytest

from speakcheck.core.exceptions import FileTooLargeError, NoAudioUploadedError
from speakcheck.core.validators import AudioUploadValidator


@pytest.mark.parametrize("raw, expected", [
    (None, 0.0),
    ("", 0.0),
    ("  ", 0.0),
    ("12", 12.0),
    (" 7.5 ", 7.5),
    ("abc", 0.0),
    ("inf", 0.0),
    ("nan", 0.0),
    ("-4", -4.0),
])
def test_parse_duration(raw, expected):
    assert AudioUploadValidator.parse_duration(raw) == expected


def test_empty_audio_is_rejected():
    with pytest.raises(NoAudioUploadedError):
        AudioUploadValidator.validate_audio_bytes(b"", 100)


def test_oversized_audio_is_rejected():
    with pytest.raises(FileTooLargeError) as exc_info:
        AudioUploadValidator.validate_audio_bytes(b"x" * 101, 100)
    assert exc_info.value.status_code == 413


def test_audio_within_limit_passes():
    AudioUploadValidator.validate_audio_bytes(b"x" * 100, 100)


def test_sanitize_filename():
    assert AudioUploadValidator.sanitize_filename("../my take (1).webm") == ".._my_take__1_.webm"
