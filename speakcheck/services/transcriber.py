import json
import logging
from typing import Optional, Protocol

import httpx

from speakcheck.core.config import settings
from speakcheck.core.exceptions import TranscriptionError
from speakcheck.models.transcript import Transcript

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "recording.webm"
DEFAULT_MIME_TYPE = "audio/webm"


class Transcriber(Protocol):
    async def transcribe(
        self,
        audio: bytes,
        mime_type: str = DEFAULT_MIME_TYPE,
        filename: str = DEFAULT_FILENAME,
    ) -> Transcript:
        ...


def extract_transcript(body: str) -> Transcript:
    """
    Достает текст из ответа STT.

    Тело, которое не является JSON, целиком считается транскриптом.
    Текст ищется в полях text, transcript, data.text.
    """
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return Transcript(text=body)

    if not isinstance(payload, dict):
        return Transcript(text="")

    data = payload.get("data")
    nested_text = data.get("text") if isinstance(data, dict) else None
    text = payload.get("text") or payload.get("transcript") or nested_text or ""
    if not isinstance(text, str):
        text = str(text)

    language_code = payload.get("language_code")
    return Transcript(
        text=text,
        language_code=language_code if isinstance(language_code, str) else None,
    )


class ElevenLabsTranscriber:
    """ElevenLabs speech-to-text client."""

    def __init__(
        self,
        api_key: str,
        model_id: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("ElevenLabs API key is required")

        self.api_key = api_key
        self.model_id = model_id or settings.elevenlabs_stt_model_id
        self.api_url = api_url or settings.elevenlabs_stt_url
        self.timeout = timeout or settings.stt_timeout

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            limits=httpx.Limits(
                max_keepalive_connections=5, max_connections=10)
        )

    async def transcribe(
        self,
        audio: bytes,
        mime_type: str = DEFAULT_MIME_TYPE,
        filename: str = DEFAULT_FILENAME,
    ) -> Transcript:
        """Send audio bytes to ElevenLabs and return the recognized text."""
        headers = {"xi-api-key": self.api_key}
        data = {"model_id": self.model_id}
        files = {"file": (filename or DEFAULT_FILENAME, audio, mime_type or DEFAULT_MIME_TYPE)}

        logger.info(f"Sending {len(audio)} bytes to ElevenLabs STT (model={self.model_id})")

        try:
            response = await self.client.post(
                self.api_url,
                headers=headers,
                data=data,
                files=files,
            )
        except httpx.RequestError as e:
            logger.error(f"ElevenLabs STT request failed: {e}")
            raise TranscriptionError("ElevenLabs STT request failed", details=str(e))

        body = response.text

        if not response.is_success:
            logger.error(f"ElevenLabs STT failed with status {response.status_code}: {body}")
            raise TranscriptionError(
                f"ElevenLabs STT failed ({response.status_code})",
                details=body,
            )

        transcript = extract_transcript(body)
        logger.info(f"Transcription complete: {len(transcript.text)} characters")
        return transcript

    async def aclose(self) -> None:
        await self.client.aclose()
