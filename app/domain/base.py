"""Base model for all domain models to inherit from."""

from typing import Self

from pydantic import BaseModel


class DomainBaseModel(BaseModel):
    """Base model for all domain models to inherit from."""


class JsonlMixin(BaseModel):
    """Mixin for domain models which are streamed as JSON lines."""

    def to_jsonl(self) -> str:
        """Serialize the model to a single JSON line, without the newline."""
        return self.model_dump_json()

    @classmethod
    def from_jsonl(cls, line: str | bytes) -> Self:
        """Parse the model from a single JSON line."""
        return cls.model_validate_json(line)
