"""Base class for domain events and observer notifications."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """An immutable record of something that happened in the core.

    Subclasses declare their payload as pydantic fields and bump
    ``__version__`` when the payload shape changes.
    """

    model_config = ConfigDict(frozen=True)

    __version__ = "v1"

    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def event_type(cls) -> str:
        return f"ComicShop.{cls.__name__}.{cls.__version__}"

    def to_log_dict(self) -> dict:
        payload = self.model_dump(mode="json", exclude={"occurred_at"})
        payload["event_type"] = self.event_type()
        return payload
