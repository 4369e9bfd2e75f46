"""Cart models: one entry per promotion service, stamped with when it was added."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

from promocart.services.models import PromotionService


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Revive an ISO-8601 timestamp written by a browser or by us.

    JavaScript writes a trailing "Z", which fromisoformat only accepts on
    Python 3.11+. Naive timestamps are taken as UTC.
    """
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CartEntry:
    """Single line item in the cart."""
    service: PromotionService
    added_at: datetime = field(default_factory=utc_now)

    @property
    def service_id(self) -> str:
        return self.service.id

    def to_dict(self) -> dict:
        """Convert to the on-disk shape: {"service": {...}, "addedAt": "<iso>"}."""
        return {
            "service": self.service.model_dump(mode="json"),
            "addedAt": self.added_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartEntry":
        """Create from the on-disk shape, reviving addedAt into a datetime."""
        return cls(
            service=PromotionService.model_validate(data["service"]),
            added_at=parse_timestamp(data["addedAt"]),
        )
