import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request, Response

from speakcheck.core.config import settings
from speakcheck.core.exceptions import RateLimitExceededError
from speakcheck.services.analyzer import SpeechAnalyzer
from speakcheck.services.pipeline import SpeechAnalysisPipeline
from speakcheck.services.rate_limiter import RateLimiter
from speakcheck.services.transcriber import ElevenLabsTranscriber

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_transcriber() -> Optional[ElevenLabsTranscriber]:
    """Создает клиент ElevenLabs, если задан ключ"""
    if not settings.transcription_configured:
        logger.warning("ELEVENLABS_API_KEY не задан, транскрибация недоступна")
        return None

    return ElevenLabsTranscriber(
        api_key=settings.elevenlabs_api_key.get_secret_value(),
        model_id=settings.elevenlabs_stt_model_id,
        api_url=settings.elevenlabs_stt_url,
        timeout=settings.stt_timeout,
    )


@lru_cache(maxsize=1)
def get_analyzer() -> SpeechAnalyzer:
    """Создает анализатор речи со словарем из настроек"""
    return SpeechAnalyzer(filler_words=settings.filler_words)


@lru_cache(maxsize=1)
def get_speech_pipeline() -> Optional[SpeechAnalysisPipeline]:
    """Создает пайплайн анализа; None, если транскрибация не настроена"""
    transcriber = get_transcriber()
    if transcriber is None:
        return None

    logger.info("Создание пайплайна анализа")
    return SpeechAnalysisPipeline(
        transcriber=transcriber,
        analyzer=get_analyzer(),
        max_concurrent=settings.max_concurrent_transcriptions,
    )


@lru_cache(maxsize=1)
def get_rate_limiter() -> Optional[RateLimiter]:
    if not settings.rate_limit_enabled:
        return None
    return RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_sec,
    )


async def enforce_rate_limit(
    request: Request,
    response: Response,
    limiter: Optional[RateLimiter] = Depends(get_rate_limiter),
) -> None:
    """Ограничивает частоту запросов по IP клиента"""
    if limiter is None:
        return

    client_key = request.client.host if request.client else "unknown"
    state = limiter.hit(client_key)
    if not state.allowed:
        logger.warning(f"Rate limit exceeded for {client_key}")
        raise RateLimitExceededError(retry_after=state.reset_after)

    response.headers["RateLimit-Limit"] = str(state.limit)
    response.headers["RateLimit-Remaining"] = str(state.remaining)
    response.headers["RateLimit-Reset"] = str(state.reset_after)


async def shutdown_transcriber() -> None:
    """Закрывает HTTP-клиент транскрибера, если он был создан"""
    if get_transcriber.cache_info().currsize == 0:
        return
    transcriber = get_transcriber()
    if transcriber is not None:
        await transcriber.aclose()
    get_transcriber.cache_clear()
    get_speech_pipeline.cache_clear()
