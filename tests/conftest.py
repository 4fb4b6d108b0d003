import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure project root is on sys.path so `import speakcheck` works during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from speakcheck.models.transcript import Transcript  # noqa: E402


class FakeTranscriber:
    """Records calls and returns a fixed transcript (or raises)."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[dict] = []

    async def transcribe(self, audio: bytes, mime_type: str = "audio/webm", filename: str = "recording.webm") -> Transcript:
        self.calls.append({"audio": audio, "mime_type": mime_type, "filename": filename})
        if self.error is not None:
            raise self.error
        return Transcript(text=self.text)


@pytest.fixture
def fake_transcriber():
    return FakeTranscriber(text="um so I think this is like really good you know")


@pytest.fixture
def make_transcriber():
    return FakeTranscriber
