"""
Поиск слов-паразитов в транскрипте.

Словарь компилируется один раз в таблицу (фраза, матчер). Матчер работает по
токенам (максимальные последовательности символов слова), поэтому "like" не
находится внутри "likely", а фразы из нескольких слов совпадают через любое
количество пробельных символов, но не через пунктуацию.
"""
import logging
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from speakcheck.models.analysis import FillerDetail

logger = logging.getLogger(__name__)

# Канонический словарь. Порядок = порядок выдачи результатов.
CANONICAL_FILLERS: Tuple[str, ...] = (
    "um",
    "uh",
    "like",
    "you know",
    "so",
    "actually",
    "basically",
    "literally",
    "kind of",
    "sort of",
    "i mean",
)

_WORD_RE = re.compile(r"\w+")
_SPACE_RE = re.compile(r"\s+")


class Token(NamedTuple):
    text: str
    start: int
    end: int


def tokenize(folded_text: str) -> List[Token]:
    """Разбивает (уже приведенный к нижнему регистру) текст на токены-слова с позициями"""
    return [Token(m.group(), m.start(), m.end()) for m in _WORD_RE.finditer(folded_text)]


def _normalize_gap(gap: str) -> str:
    return _SPACE_RE.sub(" ", gap)


class FillerMatcher:
    """Матчер одной фразы словаря."""

    def __init__(self, phrase: str):
        normalized = " ".join(phrase.split()).casefold()
        matches = list(_WORD_RE.finditer(normalized))
        if not matches:
            raise ValueError(f"Filler phrase has no word characters: {phrase!r}")

        # Крайние небуквенные символы фразы не участвуют в сравнении
        self.phrase = normalized[matches[0].start():matches[-1].end()]
        self.words: Tuple[str, ...] = tuple(m.group() for m in matches)
        self.separators: Tuple[str, ...] = tuple(
            normalized[left.end():right.start()]
            for left, right in zip(matches, matches[1:])
        )

    def __repr__(self):
        return f"FillerMatcher({self.phrase!r})"

    def count(self, folded_text: str, tokens: Sequence[Token]) -> int:
        """Количество непересекающихся вхождений, слева направо"""
        size = len(self.words)
        found = 0
        i = 0
        while i + size <= len(tokens):
            if self._matches_at(folded_text, tokens, i):
                found += 1
                i += size
            else:
                i += 1
        return found

    def _matches_at(self, folded_text: str, tokens: Sequence[Token], index: int) -> bool:
        for offset, word in enumerate(self.words):
            if tokens[index + offset].text != word:
                return False

        for offset, separator in enumerate(self.separators):
            left = tokens[index + offset]
            right = tokens[index + offset + 1]
            gap = folded_text[left.end:right.start]
            if _normalize_gap(gap) != separator:
                return False

        return True


class FillerDetector:
    """Считает слова-паразиты по словарю в фиксированном порядке."""

    def __init__(self, vocabulary: Iterable[str] = CANONICAL_FILLERS):
        self._matchers: List[FillerMatcher] = []
        seen = set()
        for phrase in vocabulary:
            try:
                matcher = FillerMatcher(phrase)
            except ValueError as e:
                logger.warning(f"Пропускаем фразу из словаря: {e}")
                continue
            if matcher.phrase in seen:
                continue
            seen.add(matcher.phrase)
            self._matchers.append(matcher)

    @property
    def vocabulary(self) -> List[str]:
        return [matcher.phrase for matcher in self._matchers]

    def detect(self, text: Optional[str]) -> List[FillerDetail]:
        if not text or not self._matchers:
            return []

        folded = text.casefold()
        tokens = tokenize(folded)
        details = []
        for matcher in self._matchers:
            count = matcher.count(folded, tokens)
            if count > 0:
                details.append(FillerDetail(word=matcher.phrase, count=count))
        return details


DEFAULT_DETECTOR = FillerDetector(CANONICAL_FILLERS)


def detect_fillers(text: Optional[str], detector: Optional[FillerDetector] = None) -> List[FillerDetail]:
    return (detector or DEFAULT_DETECTOR).detect(text)
