from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from ..errors import ComponentError

GENDERS = ("men", "women", "all")


class Intent(BaseModel):
    keywords: list[str] = Field(default_factory=list)
    category: str = "all"
    gender: str = "all"
    text: str = ""
    structured: bool = True

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: object) -> object:
        # The LLM returns either "key1,key2" or ["key1", "key2"]
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return [str(k).strip().lower() for k in value if str(k).strip()]
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: object) -> object:
        if value is None:
            return "all"
        if isinstance(value, str):
            return value.strip().lower() or "all"
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def _normalize_gender(cls, value: object) -> object:
        if value is None:
            return "all"
        if isinstance(value, str):
            lowered = value.strip().lower()
            return lowered if lowered in GENDERS else "all"
        return value

    @model_validator(mode="after")
    def _fill_text(self) -> "Intent":
        if not self.text and self.keywords:
            self.text = " ".join(self.keywords)
        return self

    @classmethod
    def default(cls) -> "Intent":
        return cls(keywords=[], category="all", gender="all")

    @classmethod
    def from_tag_keywords(cls, text: str) -> "Intent":
        return cls(keywords=text.lower().split(), text=text, structured=False)


class IntentResult(BaseModel):
    intent: Intent = Field(default_factory=Intent.default)
    error: ComponentError | None = None


class TagKeywordResult(BaseModel):
    text: str = ""
    error: ComponentError | None = None


class ConversationTurn(BaseModel):
    role: str
    content: str


class ConversationHistory(BaseModel):
    """
    Rolling chat context owned by the caller.

    Append-only between resets. ``max_turns`` of ``None`` keeps every turn for
    the life of the object; a number keeps only the most recent turns.
    """

    turns: list[ConversationTurn] = Field(default_factory=list)
    max_turns: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _trim_on_load(self) -> "ConversationHistory":
        self._trim()
        return self

    def _trim(self) -> None:
        if self.max_turns is not None and len(self.turns) > self.max_turns:
            del self.turns[: len(self.turns) - self.max_turns]

    def append(self, role: str, content: str) -> None:
        self.turns.append(ConversationTurn(role=role, content=content))
        self._trim()

    def reset(self) -> None:
        self.turns.clear()

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": t.role, "content": t.content} for t in self.turns]
