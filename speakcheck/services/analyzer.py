import math
from typing import Iterable, Optional, Union

from speakcheck.models.analysis import (
    AnalysisReport, FillerStats, Scores, Tips
)
from speakcheck.services.fillers import FillerDetector, detect_fillers
from speakcheck.services.scoring import (
    FAST_PACE_WPM,
    SLOW_PACE_WPM,
    calc_wpm,
    round_half_up,
    score_clarity,
    score_confidence,
)

# --------------------
# Тексты отчета
# --------------------

NO_TRANSCRIPT_SUMMARY = "No transcript detected. Try speaking louder and longer (10+ seconds)."
PACE_TIP_SLOW = "Consider speaking a bit faster."
PACE_TIP_FAST = "Slow down slightly."
PACE_TIP_GOOD = "Good pace."
FILLERS_TIP_NONE = "Nice — no filler words detected."
FILLERS_TIP_SOME = "Try pausing instead of fillers."


def count_words(text: Optional[str]) -> int:
    """Количество токенов, разделенных пробельными символами"""
    if not text:
        return 0
    return len(text.split())


def _normalize_duration(duration_seconds) -> float:
    try:
        duration = float(duration_seconds or 0)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(duration) or duration < 0:
        return 0.0
    return duration


def _json_number(value: float) -> Union[int, float]:
    """Ð¦ÐµÐ»ÑÐµ Ð·Ð½Ð°ÑÐµÐ½Ð¸Ñ Ð¾ÑÐ´Ð°ÑÑÑÑ ÐºÐ°Ðº int: 10, Ð° Ð½Ðµ 10.0"""
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def pace_tip(wpm: int) -> str:
    if wpm < SLOW_PACE_WPM:
        return PACE_TIP_SLOW
    if wpm > FAST_PACE_WPM:
        return PACE_TIP_FAST
    return PACE_TIP_GOOD


def fillers_tip(filler_total: int) -> str:
    return FILLERS_TIP_NONE if filler_total == 0 else FILLERS_TIP_SOME


def build_summary(transcript: str) -> str:
    if transcript:
        return f'You said: "{transcript}".'
    return NO_TRANSCRIPT_SUMMARY


def build_report(
    transcript: Optional[str],
    duration_seconds: Optional[float],
    detector: Optional[FillerDetector] = None,
) -> AnalysisReport:
    """
    Строит отчет о качестве речи по транскрипту и длительности записи.

    Чистая функция: без I/O и состояния, не бросает исключений на
    некорректном вводе (None и мусор превращаются в пустые/нулевые значения).
    """
    transcript = transcript if isinstance(transcript, str) else ""
    duration = _normalize_duration(duration_seconds)

    word_count = count_words(transcript)
    filler_details = detect_fillers(transcript, detector)
    filler_total = sum(item.count for item in filler_details)
    filler_ratio = filler_total / word_count if word_count > 0 else 0.0

    wpm = calc_wpm(word_count, duration)

    return AnalysisReport(
        transcript=transcript,
        duration_seconds=_json_number(duration),
        word_count=word_count,
        wpm=wpm,
        filler=FillerStats(
            total=filler_total,
            ratio=_json_number(round_half_up(filler_ratio * 100, 1)),
            details=filler_details,
        ),
        scores=Scores(
            clarity=score_clarity(filler_ratio),
            confidence=score_confidence(wpm),
        ),
        summary=build_summary(transcript),
        tips=Tips(
            pace=pace_tip(wpm),
            fillers=fillers_tip(filler_total),
        ),
    )


class SpeechAnalyzer:
    """Анализатор с настраиваемым словарем слов-паразитов"""

    def __init__(self, filler_words: Optional[Iterable[str]] = None):
        self.detector = FillerDetector(filler_words) if filler_words is not None else None

    def analyze(self, transcript: Optional[str], duration_seconds: Optional[float]) -> AnalysisReport:
        return build_report(transcript, duration_seconds, self.detector)
