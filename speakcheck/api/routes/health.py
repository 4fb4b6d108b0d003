from fastapi import APIRouter

from speakcheck import __version__
from speakcheck.core.config import settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "ok": True,
        "service": "SpeakCheck API",
        "version": __version__,
        "transcription": settings.transcription_configured,
    }
