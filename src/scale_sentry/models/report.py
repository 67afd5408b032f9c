from typing import Literal
from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class SnippetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    location: str | None = None
    lines: list[str]


class FileRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    path: str
    added_lines: int
    heuristics: list[str]
    snippets: list[SnippetOut]


class AnalysisOut(BaseModel):
    files: list[FileRecordOut]
    highlighted_tags: list[str]
    rendered: str
    truncated: bool = False
