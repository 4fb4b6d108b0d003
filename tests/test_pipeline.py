"""Tests for the transcription + analysis pipeline."""
import asyncio

import pytest

from speakcheck.core.exceptions import TranscriptionError
from speakcheck.models.transcript import Transcript
from speakcheck.services.analyzer import SpeechAnalyzer
from speakcheck.services.pipeline import SpeechAnalysisPipeline


def test_analyze_audio_transcribes_then_builds_report(fake_transcriber):
    pipeline = SpeechAnalysisPipeline(fake_transcriber, SpeechAnalyzer(), max_concurrent=1)

    report = asyncio.run(pipeline.analyze_audio(b"bytes", 10, mime_type="audio/webm", filename="r.webm"))

    assert fake_transcriber.calls == [{"audio": b"bytes", "mime_type": "audio/webm", "filename": "r.webm"}]
    assert report.word_count == 11
    assert report.wpm == 66


def test_transcription_errors_propagate(make_transcriber):
    transcriber = make_transcriber(error=TranscriptionError("ElevenLabs STT failed (500)", details="oops"))
    pipeline = SpeechAnalysisPipeline(transcriber, SpeechAnalyzer())

    with pytest.raises(TranscriptionError):
        asyncio.run(pipeline.analyze_audio(b"bytes", 10))


def test_concurrent_transcriptions_are_bounded():
    active = 0
    peak = 0

    class SlowTranscriber:
        async def transcribe(self, audio, mime_type="audio/webm", filename="recording.webm"):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return Transcript(text="hello world")

    async def go():
        pipeline = SpeechAnalysisPipeline(SlowTranscriber(), SpeechAnalyzer(), max_concurrent=2)
        return await asyncio.gather(*(pipeline.analyze_audio(b"x", 1) for _ in range(6)))

    reports = asyncio.run(go())

    assert len(reports) == 6
    assert all(r.word_count == 2 for r in reports)
    assert peak <= 2


def test_analyze_transcript_skips_transcription(make_transcriber):
    transcriber = make_transcriber(text="unused")
    pipeline = SpeechAnalysisPipeline(transcriber, SpeechAnalyzer(filler_words=["well"]))

    report = pipeline.analyze_transcript("well well", 1)

    assert transcriber.calls == []
    assert report.filler.total == 2
