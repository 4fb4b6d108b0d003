import asyncio
import logging
import time
from typing import Optional

from speakcheck.core.config import settings
from speakcheck.models.analysis import AnalysisReport
from speakcheck.services.analyzer import SpeechAnalyzer
from speakcheck.services.transcriber import (
    DEFAULT_FILENAME,
    DEFAULT_MIME_TYPE,
    Transcriber,
)

logger = logging.getLogger(__name__)


class SpeechAnalysisPipeline:
    def __init__(
        self,
        transcriber: Transcriber,
        analyzer: SpeechAnalyzer,
        max_concurrent: Optional[int] = None,
    ):
        self.transcriber = transcriber
        self.analyzer = analyzer

        # Ограничение параллельных обращений к сервису транскрибации.
        # Сам анализ чистый и блокировок не требует.
        self._semaphore = asyncio.Semaphore(
            max_concurrent or settings.max_concurrent_transcriptions)

    async def analyze_audio(
        self,
        audio: bytes,
        duration_seconds: float,
        mime_type: str = DEFAULT_MIME_TYPE,
        filename: str = DEFAULT_FILENAME,
    ) -> AnalysisReport:
        """
        Транскрибирует аудио и строит отчет.
        Ошибки транскрибации пробрасываются без повторов.
        """
        started = time.perf_counter()

        async with self._semaphore:
            transcript = await self.transcriber.transcribe(
                audio, mime_type=mime_type, filename=filename)

        transcribed = time.perf_counter()
        report = self.analyze_transcript(transcript.text, duration_seconds)

        logger.info(
            f"Анализ завершен: {report.word_count} слов, {report.wpm} wpm, "
            f"{report.filler.total} слов-паразитов "
            f"(транскрибация {transcribed - started:.2f}s, "
            f"всего {time.perf_counter() - started:.2f}s)"
        )
        return report

    def analyze_transcript(self, transcript: str, duration_seconds: float) -> AnalysisReport:
        return self.analyzer.analyze(transcript, duration_seconds)
