"""
Темп речи и дискретные оценки.

Оценки заданы таблицами правил (условие, балл): срабатывает первое
подходящее правило, иначе возвращается балл по умолчанию.
"""
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Callable, NamedTuple, Optional, Sequence

# Пороги подсказок по темпу (не совпадают с порогами оценки уверенности)
SLOW_PACE_WPM = 110
FAST_PACE_WPM = 180


class ScoreRule(NamedTuple):
    matches: Callable[[float], bool]
    score: int


CLARITY_RULES: Sequence[ScoreRule] = (
    ScoreRule(lambda ratio: ratio <= 0.02, 90),
    ScoreRule(lambda ratio: ratio <= 0.05, 80),
    ScoreRule(lambda ratio: ratio <= 0.10, 70),
)
CLARITY_DEFAULT = 60

CONFIDENCE_RULES: Sequence[ScoreRule] = (
    ScoreRule(lambda wpm: 120 <= wpm <= 170, 80),
    ScoreRule(lambda wpm: 90 <= wpm < 120, 70),
    ScoreRule(lambda wpm: 170 < wpm <= 200, 65),
)
CONFIDENCE_DEFAULT = 50


def apply_rules(rules: Sequence[ScoreRule], value: float, default: int) -> int:
    for rule in rules:
        if rule.matches(value):
            return rule.score
    return default


def round_half_up(value: float, places: int = 0) -> float:
    """
    Округление точного двоичного значения к ближайшему, половина от нуля.

    Для неотрицательных входов совпадает с Math.round / Number.toFixed из JS,
    в отличие от встроенного round() (банковское округление).
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    # Точности по умолчанию (28 знаков) не хватает для больших значений
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def calc_wpm(word_count: int, seconds: Optional[float]) -> int:
    """Слов в минуту; 0 если длительность не задана или не положительна"""
    if not seconds or not math.isfinite(seconds) or seconds <= 0:
        return 0
    value = word_count / seconds * 60
    if not math.isfinite(value):
        return 0
    return int(round_half_up(value))


def score_clarity(filler_ratio: float) -> int:
    """filler_ratio - доля (0..1), не проценты"""
    return apply_rules(CLARITY_RULES, filler_ratio, CLARITY_DEFAULT)


def score_confidence(wpm: float) -> int:
    return apply_rules(CONFIDENCE_RULES, wpm, CONFIDENCE_DEFAULT)
