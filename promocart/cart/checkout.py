"""Checkout hand-off: the frozen cart contents campaign creation reads."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Tuple

from promocart.services.money import format_money, total

from .models import CartEntry, utc_now


@dataclass(frozen=True)
class CheckoutSnapshot:
    """Cart contents at the moment the user confirmed the order."""
    entries: Tuple[CartEntry, ...]
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_entries(cls, entries) -> "CheckoutSnapshot":
        return cls(entries=tuple(entries))

    @property
    def total_price(self) -> Decimal:
        return total(entry.service.price for entry in self.entries)

    @property
    def item_count(self) -> int:
        return len(self.entries)

    @property
    def service_ids(self) -> Tuple[str, ...]:
        return tuple(entry.service_id for entry in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict for the campaign creation flow."""
        return {
            "items": [
                {
                    "service_id": entry.service.id,
                    "name": entry.service.name,
                    "category": entry.service.category,
                    "price": str(entry.service.price),
                    "added_at": entry.added_at.isoformat(),
                }
                for entry in self.entries
            ],
            "item_count": self.item_count,
            "total_price": str(self.total_price),
            "total_display": format_money(self.total_price),
            "created_at": self.created_at.isoformat(),
        }
