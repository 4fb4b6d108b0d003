from typing import Annotated, Optional, List
from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, SecretStr, field_validator
import json

from speakcheck.services.fillers import CANONICAL_FILLERS


class Settings(BaseSettings):
    """Application configuration settings."""

    # Сервер
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    static_dir: Optional[str] = Field(default=None, alias="STATIC_DIR")

    # ElevenLabs speech-to-text
    elevenlabs_api_key: Optional[SecretStr] = Field(
        default=None, alias="ELEVENLABS_API_KEY"
    )
    elevenlabs_stt_model_id: str = Field(
        default="scribe_v1", alias="ELEVENLABS_STT_MODEL_ID"
    )
    elevenlabs_stt_url: str = Field(
        default="https://api.elevenlabs.io/v1/speech-to-text",
        alias="ELEVENLABS_STT_URL"
    )
    stt_timeout: float = Field(default=60.0, alias="STT_TIMEOUT")

    # Загрузка аудио
    max_upload_size_mb: int = Field(
        default=12, alias="MAX_UPLOAD_SIZE_MB"
    )
    max_concurrent_transcriptions: int = Field(
        default=5, alias="MAX_CONCURRENT_TRANSCRIPTIONS"
    )

    # Ограничение частоты запросов на /api/analyze-audio
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_max_requests: int = Field(
        default=30, alias="RATE_LIMIT_MAX_REQUESTS"
    )
    rate_limit_window_sec: int = Field(
        default=15 * 60, alias="RATE_LIMIT_WINDOW_SEC"
    )

    # Словарь слов-паразитов (порядок важен: в нём же выдаются результаты)
    filler_words: Annotated[List[str], NoDecode] = Field(
        default=list(CANONICAL_FILLERS), alias="FILLER_WORDS"
    )

    # Настройки логирования
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_max_size_mb: int = Field(default=10, alias="LOG_MAX_SIZE_MB")
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
    }

    @property
    def transcription_configured(self) -> bool:
        return bool(
            self.elevenlabs_api_key and self.elevenlabs_api_key.get_secret_value()
        )

    @field_validator("max_upload_size_mb")
    def validate_max_upload_size(cls, v):
        if v <= 0:
            raise ValueError("MAX_UPLOAD_SIZE_MB must be positive")
        if v > 100:
            raise ValueError("MAX_UPLOAD_SIZE_MB cannot exceed 100")
        return v

    @field_validator("stt_timeout")
    def validate_stt_timeout(cls, v):
        if v <= 0:
            raise ValueError("STT_TIMEOUT must be positive")
        return v

    @field_validator("filler_words", mode="before")
    def parse_filler_words(cls, v):
        """Парсит словарь слов-паразитов из JSON-списка или строки через запятую"""
        if v is None:
            return list(CANONICAL_FILLERS)

        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    v = parsed
                else:
                    v = [item.strip() for item in v.split(",") if item.strip()]
            except json.JSONDecodeError:
                v = [item.strip() for item in v.split(",") if item.strip()]

        # Нормализуем пробелы и регистр, убираем дубликаты с сохранением порядка
        if isinstance(v, list):
            validated = []
            for phrase in v:
                if not isinstance(phrase, str):
                    continue
                phrase = " ".join(phrase.split()).casefold()
                if phrase and phrase not in validated:
                    validated.append(phrase)
            return validated

        return v

    @field_validator("log_max_size_mb")
    def validate_log_max_size(cls, v):
        if v <= 0:
            raise ValueError("LOG_MAX_SIZE_MB must be positive")
        if v > 100:  # 100 MB max
            raise ValueError("LOG_MAX_SIZE_MB cannot exceed 100")
        return v

    @field_validator("log_backup_count")
    def validate_log_backup_count(cls, v):
        if v < 0:
            raise ValueError("LOG_BACKUP_COUNT cannot be negative")
        if v > 20:
            raise ValueError("LOG_BACKUP_COUNT cannot exceed 20")
        return v

    @field_validator("max_concurrent_transcriptions")
    def validate_max_concurrent_transcriptions(cls, v):
        if v <= 0:
            raise ValueError("MAX_CONCURRENT_TRANSCRIPTIONS must be positive")
        if v > 20:
            raise ValueError("MAX_CONCURRENT_TRANSCRIPTIONS cannot exceed 20")
        return v

    @field_validator("rate_limit_max_requests", "rate_limit_window_sec")
    def validate_rate_limit(cls, v):
        if v <= 0:
            raise ValueError("Rate limit values must be positive")
        return v


settings = Settings()
