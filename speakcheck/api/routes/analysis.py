import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from speakcheck.api.deps import (
    enforce_rate_limit,
    get_analyzer,
    get_speech_pipeline,
)
from speakcheck.core.config import settings
from speakcheck.core.exceptions import (
    AnalysisFailedError,
    MissingConfigurationError,
    NoAudioUploadedError,
    SpeakCheckException,
)
from speakcheck.core.validators import AudioUploadValidator
from speakcheck.models.analysis import (
    AnalysisResponse,
    ErrorResponse,
    TranscriptAnalysisRequest,
)
from speakcheck.services.analyzer import SpeechAnalyzer
from speakcheck.services.pipeline import SpeechAnalysisPipeline
from speakcheck.services.transcriber import DEFAULT_FILENAME, DEFAULT_MIME_TYPE

router = APIRouter(prefix="/api", tags=["analysis"])
logger = logging.getLogger(__name__)


@router.post(
    "/analyze-audio",
    response_model=AnalysisResponse,
    summary="Анализ записанной речи",
    description="""
    Принимает аудиозапись (multipart, поле `audio`) и ее длительность
    (`durationSeconds`), распознает речь через ElevenLabs и возвращает отчет:
    количество слов, темп, слова-паразиты, оценки четкости и уверенности,
    краткое резюме и советы.
    """,
    responses={
        200: {"description": "Анализ успешно выполнен"},
        400: {"model": ErrorResponse, "description": "Аудио не загружено"},
        413: {"model": ErrorResponse, "description": "Файл слишком большой"},
        429: {"model": ErrorResponse, "description": "Слишком много запросов"},
        500: {"model": ErrorResponse, "description": "Ошибка конфигурации или анализа"},
        502: {"model": ErrorResponse, "description": "Ошибка сервиса распознавания"},
    },
)
async def analyze_audio(
    _rate_limit: None = Depends(enforce_rate_limit),
    pipeline: Optional[SpeechAnalysisPipeline] = Depends(get_speech_pipeline),
    audio: Optional[UploadFile] = File(None, description="Аудиозапись (webm и т.п.)"),
    duration_seconds: Optional[str] = Form(None, alias="durationSeconds"),
) -> AnalysisResponse:
    if pipeline is None:
        raise MissingConfigurationError("ELEVENLABS_API_KEY")

    if audio is None:
        raise NoAudioUploadedError()

    logger.info(f"Получен запрос на анализ аудио: {audio.filename}")

    try:
        max_size_bytes = settings.max_upload_size_mb * 1024 * 1024
        content = await audio.read(max_size_bytes + 1)
        AudioUploadValidator.validate_audio_bytes(content, max_size_bytes)

        duration = AudioUploadValidator.parse_duration(duration_seconds)
        filename = (
            AudioUploadValidator.sanitize_filename(audio.filename)
            if audio.filename else DEFAULT_FILENAME
        )

        report = await pipeline.analyze_audio(
            content,
            duration_seconds=duration,
            mime_type=audio.content_type or DEFAULT_MIME_TYPE,
            filename=filename,
        )
        return AnalysisResponse(result=report)

    except SpeakCheckException:
        raise

    except Exception as e:
        logger.error(f"Неожиданная ошибка анализа {audio.filename}: {e}", exc_info=True)
        raise AnalysisFailedError(details=str(e))

    finally:
        await audio.close()


@router.post(
    "/analyze-text",
    response_model=AnalysisResponse,
    summary="Анализ готового транскрипта",
    description="Строит тот же отчет по тексту и длительности без распознавания речи.",
)
async def analyze_text(
    request: TranscriptAnalysisRequest,
    analyzer: SpeechAnalyzer = Depends(get_analyzer),
) -> AnalysisResponse:
    report = analyzer.analyze(request.transcript, request.duration_seconds)
    return AnalysisResponse(result=report)
