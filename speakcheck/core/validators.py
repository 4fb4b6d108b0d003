import logging
import math
import re
from typing import Optional

from speakcheck.core.exceptions import FileTooLargeError, NoAudioUploadedError

logger = logging.getLogger(__name__)


class AudioUploadValidator:
    """Проверки загруженной записи и полей формы"""

    @staticmethod
    def validate_audio_bytes(content: bytes, max_size_bytes: int) -> None:
        """
        Проверяет содержимое загруженного аудио.

        Args:
            content: Прочитанные байты (не больше max_size_bytes + 1)
            max_size_bytes: Максимальный размер в байтах

        Raises:
            NoAudioUploadedError: файл пуст
            FileTooLargeError: файл превышает лимит
        """
        if not content:
            raise NoAudioUploadedError()
        if len(content) > max_size_bytes:
            raise FileTooLargeError(len(content), max_size_bytes)

    @staticmethod
    def parse_duration(raw: Optional[str]) -> float:
        """Длительность из формы; пустое, нечисловое и бесконечное значение дают 0"""
        if raw is None or not str(raw).strip():
            return 0.0
        try:
            duration = float(str(raw).strip())
        except ValueError:
            logger.warning(f"Некорректное значение durationSeconds: {raw!r}")
            return 0.0
        if not math.isfinite(duration):
            return 0.0
        return duration

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """Очищает имя файла от потенциально опасных символов"""
        safe_name = re.sub(r'[^\w\-_.]', '_', filename)
        return safe_name[:255]
