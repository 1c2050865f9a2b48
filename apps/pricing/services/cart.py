"""
Cart snapshot used by pricing rules and coupon scopes.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from apps.common.money import ZERO, to_decimal


@dataclass(frozen=True)
class CartLine:
    product_id: str
    unit_price: Decimal
    quantity: int = 1
    category_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'product_id', str(self.product_id))
        if self.category_id is not None:
            object.__setattr__(self, 'category_id', str(self.category_id))
        object.__setattr__(self, 'unit_price', to_decimal(self.unit_price))
        if self.unit_price < ZERO:
            raise ValueError("unit_price must be non-negative")
        if self.quantity < 0:
            raise ValueError("quantity must be non-negative")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    lines: Tuple[CartLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))

    @classmethod
    def from_items(cls, items):
        """Build from dicts with product_id, unit_price, quantity, category_id"""
        return cls(tuple(
            CartLine(
                product_id=item['product_id'],
                unit_price=item['unit_price'],
                quantity=item.get('quantity', 1),
                category_id=item.get('category_id'),
            )
            for item in items
        ))

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), ZERO)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def product_ids(self) -> frozenset:
        return frozenset(line.product_id for line in self.lines)

    @property
    def category_ids(self) -> frozenset:
        return frozenset(line.category_id for line in self.lines if line.category_id is not None)

    def lines_in_scope(self, applies_to, applies_to_ids):
        """Lines covered by a scope: 'all', 'category' ids or 'product' ids"""
        if applies_to == 'all':
            return self.lines
        ids = {str(value) for value in (applies_to_ids or [])}
        if applies_to == 'product':
            return tuple(line for line in self.lines if line.product_id in ids)
        if applies_to == 'category':
            return tuple(line for line in self.lines if line.category_id in ids)
        return ()

    def scoped_subtotal(self, applies_to, applies_to_ids) -> Decimal:
        return sum((line.line_total for line in self.lines_in_scope(applies_to, applies_to_ids)), ZERO)
