from pydantic import BaseModel
from typing import Optional


class Transcript(BaseModel):
    text: str = ""
    language_code: Optional[str] = None
