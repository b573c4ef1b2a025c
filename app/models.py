from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str = ""
    user_name: str = ""

    @field_validator("message", "user_name", mode="before")
    @classmethod
    def _only_strings(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class ScoredCandidate(BaseModel):
    message: Message
    score: int


class FixedAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    keywords: Tuple[str, ...]
    answer: str

    def matches(self, question: str) -> bool:
        q = question.lower()
        return all(k in q for k in self.keywords)


class AnswerResponse(BaseModel):
    answer: str
