"""
Trade outcomes.
Business failures are returned as values; TradeError only travels inside an
engine transaction so that raising it rolls the transaction back.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TradeErrorKind(str, Enum):
    INVALID_QUANTITY = "INVALID_QUANTITY"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    MERCHANT_NOT_FOUND = "MERCHANT_NOT_FOUND"
    LICENSE_INSUFFICIENT = "LICENSE_INSUFFICIENT"
    ITEM_NOT_OFFERED = "ITEM_NOT_OFFERED"
    PRICE_NOT_FOUND = "PRICE_NOT_FOUND"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INVENTORY_FULL = "INVENTORY_FULL"
    ITEM_NOT_OWNED = "ITEM_NOT_OWNED"
    INSUFFICIENT_QUANTITY = "INSUFFICIENT_QUANTITY"
    MAX_TIER_REACHED = "MAX_TIER_REACHED"
    INSUFFICIENT_TRUST = "INSUFFICIENT_TRUST"
    BONUS_NOT_YET_AVAILABLE = "BONUS_NOT_YET_AVAILABLE"
    STORAGE_ERROR = "STORAGE_ERROR"


NOT_FOUND_KINDS = frozenset({
    TradeErrorKind.PLAYER_NOT_FOUND,
    TradeErrorKind.MERCHANT_NOT_FOUND,
    TradeErrorKind.PRICE_NOT_FOUND,
    TradeErrorKind.ITEM_NOT_OWNED,
})


class TradeError(Exception):
    def __init__(self, kind: TradeErrorKind, detail: str | None = None, data: dict[str, Any] | None = None):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail
        self.data = data


@dataclass
class TradeOutcome:
    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: TradeErrorKind | None = None
    detail: str | None = None

    @classmethod
    def ok(cls, data: dict[str, Any]) -> "TradeOutcome":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: TradeError) -> "TradeOutcome":
        return cls(success=False, data=exc.data or {}, error=exc.kind, detail=exc.detail)
