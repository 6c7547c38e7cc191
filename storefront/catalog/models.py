from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ComponentError


class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    product_type: str | None = None
    tags: str | None = None
    body_html: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> str:
        # Shopify ids arrive as integers
        return str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _join_tag_list(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return value

    @property
    def tag_list(self) -> list[str]:
        """Lower-cased, trimmed tags with empty entries dropped."""
        if not self.tags:
            return []
        return [t.strip().lower() for t in self.tags.split(",") if t.strip()]


class CatalogFetchResult(BaseModel):
    items: list[CatalogItem] = Field(default_factory=list)
    error: ComponentError | None = None
