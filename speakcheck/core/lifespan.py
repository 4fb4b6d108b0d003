import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from speakcheck.api.deps import shutdown_transcriber
from speakcheck.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Логирует конфигурацию при старте и закрывает HTTP-клиент STT при остановке.
    Клиент создается лениво, при первом запросе.
    """
    logger.info("🚀 Запуск SpeakCheck API")
    logger.info(f"ELEVENLABS_API_KEY загружен: {settings.transcription_configured}")
    logger.info(f"STT model_id: {settings.elevenlabs_stt_model_id}")
    logger.info(f"Словарь слов-паразитов: {len(settings.filler_words)} фраз")

    app.state.initialized = True

    try:
        logger.info("✅ Приложение готово")
        yield
    finally:
        logger.info("🛑 Завершение работы...")
        try:
            await shutdown_transcriber()
            logger.info("🔒 Клиент STT закрыт")
        except Exception as e:
            logger.warning(f"Ошибка закрытия клиента STT: {e}")
        logger.info("👋 Завершение работы выполнено")
