"""
Condition expressions for dynamic pricing rules.

Rules store their conditions as JSON. The JSON is parsed into a small
tagged tree and evaluated against a Cart snapshot:

    {}                                                  always true
    {"field": "subtotal", "op": "gte", "value": 50}     comparison
    {"field": "category_ids", "op": "contains", "value": "shirts"}
    {"all": [...]}  {"any": [...]}  {"not": {...}}      combinators
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from apps.common.money import to_decimal


class ConditionError(ValueError):
    """Raised when a stored condition cannot be parsed."""


NUMERIC_FIELDS = {
    'subtotal': lambda cart: cart.subtotal,
    'item_count': lambda cart: Decimal(cart.item_count),
    'line_count': lambda cart: Decimal(cart.line_count),
}

SET_FIELDS = {
    'product_ids': lambda cart: cart.product_ids,
    'category_ids': lambda cart: cart.category_ids,
}

NUMERIC_OPERATORS = {
    'eq': lambda left, right: left == right,
    'ne': lambda left, right: left != right,
    'gt': lambda left, right: left > right,
    'gte': lambda left, right: left >= right,
    'lt': lambda left, right: left < right,
    'lte': lambda left, right: left <= right,
}

SET_OPERATORS = {
    'contains': lambda values, operand: operand in values,
    'intersects': lambda values, operand: bool(values & operand),
}


class Condition:
    def evaluate(self, cart) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Always(Condition):
    def evaluate(self, cart):
        return True


@dataclass(frozen=True)
class NumericComparison(Condition):
    field: str
    op: str
    value: Decimal

    def evaluate(self, cart):
        return NUMERIC_OPERATORS[self.op](NUMERIC_FIELDS[self.field](cart), self.value)


@dataclass(frozen=True)
class SetComparison(Condition):
    field: str
    op: str
    value: object  # str for contains, frozenset for intersects

    def evaluate(self, cart):
        return SET_OPERATORS[self.op](SET_FIELDS[self.field](cart), self.value)


@dataclass(frozen=True)
class AllOf(Condition):
    children: Tuple[Condition, ...]

    def evaluate(self, cart):
        return all(child.evaluate(cart) for child in self.children)


@dataclass(frozen=True)
class AnyOf(Condition):
    children: Tuple[Condition, ...]

    def evaluate(self, cart):
        return any(child.evaluate(cart) for child in self.children)


@dataclass(frozen=True)
class Not(Condition):
    child: Condition

    def evaluate(self, cart):
        return not self.child.evaluate(cart)


def _parse_children(raw, key):
    children = raw[key]
    if not isinstance(children, list):
        raise ConditionError(f"'{key}' expects a list of conditions")
    return tuple(parse_condition(child) for child in children)


def _parse_comparison(raw):
    field_name = raw.get('field')
    op = raw.get('op')
    if 'value' not in raw:
        raise ConditionError(f"Comparison on '{field_name}' is missing 'value'")
    value = raw['value']

    if field_name in NUMERIC_FIELDS:
        if op not in NUMERIC_OPERATORS:
            raise ConditionError(f"Operator '{op}' is not valid for numeric field '{field_name}'")
        try:
            return NumericComparison(field_name, op, to_decimal(value))
        except ValueError as e:
            raise ConditionError(str(e))

    if field_name in SET_FIELDS:
        if op == 'contains':
            if isinstance(value, (list, dict)) or value is None:
                raise ConditionError("'contains' expects a single id")
            return SetComparison(field_name, op, str(value))
        if op == 'intersects':
            if not isinstance(value, list):
                raise ConditionError("'intersects' expects a list of ids")
            return SetComparison(field_name, op, frozenset(str(item) for item in value))
        raise ConditionError(f"Operator '{op}' is not valid for set field '{field_name}'")

    raise ConditionError(f"Unknown condition field '{field_name}'")


def parse_condition(raw) -> Condition:
    """Parse the stored JSON structure into a Condition tree."""
    if raw is None or raw == {}:
        return Always()
    if not isinstance(raw, dict):
        raise ConditionError(f"Condition must be an object, got {type(raw).__name__}")

    if 'all' in raw:
        return AllOf(_parse_children(raw, 'all'))
    if 'any' in raw:
        return AnyOf(_parse_children(raw, 'any'))
    if 'not' in raw:
        return Not(parse_condition(raw['not']))
    if 'field' in raw:
        return _parse_comparison(raw)

    raise ConditionError(f"Unrecognised condition keys: {sorted(raw)}")
