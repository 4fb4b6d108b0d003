from typing import Optional

from fastapi import status


class SpeakCheckException(Exception):
    """Базовая ошибка сервиса. Рендерится в конверт {ok: false, error, details?}"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, details: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.details = details


class MissingConfigurationError(SpeakCheckException):
    """Не задан ключ сервиса транскрибации"""

    def __init__(self, setting_name: str = "ELEVENLABS_API_KEY"):
        super().__init__(f"Missing {setting_name} in .env")
        self.setting_name = setting_name


class NoAudioUploadedError(SpeakCheckException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str = "No audio uploaded"):
        super().__init__(detail)


class FileTooLargeError(SpeakCheckException):
    status_code = 413

    def __init__(self, file_size: int, max_size_bytes: int):
        max_mb = max_size_bytes / (1024 * 1024)
        super().__init__(
            f"Audio file too large (max {max_mb:g} MB)",
            details=f"Upload exceeds {max_size_bytes} bytes",
        )
        self.file_size = file_size
        self.max_size_bytes = max_size_bytes


class TranscriptionError(SpeakCheckException):
    """Ошибка внешнего сервиса распознавания речи"""

    status_code = status.HTTP_502_BAD_GATEWAY


class RateLimitExceededError(SpeakCheckException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, retry_after: int):
        super().__init__("Too many requests, try again later.")
        self.retry_after = retry_after


class AnalysisFailedError(SpeakCheckException):
    def __init__(self, details: Optional[str] = None):
        super().__init__("Server analysis failed", details=details)
