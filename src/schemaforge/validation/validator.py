"""Rule-driven validation of decoded values.

Walks a value tree guided by a rule tree:

1. Insert defaults into objects that lack a field
2. Check presence of required fields
3. Check the value's type (or union of types)
4. Check enum membership
5. Apply range and regex constraints in declared order
6. Recurse into array elements and object children

The first failure raises ValidationError; defaults inserted before the
failure stay in the value.
"""

import copy
import re
from typing import Any

from schemaforge.core.errors import ValidationError
from schemaforge.core.types import FieldRule, RangeConstraint, RegexConstraint
from schemaforge.core.values import ValueKind, kind_of, values_equal
from schemaforge.validation.formats import validate_type
from schemaforge.validation.types import DEFAULT_OPTIONS, ValidationOptions, ValidationResult

_MISSING = object()

_LENGTH_BOUND = re.compile(r"^\+?\d+$")


def validate_object(
    value: Any,
    rules: list[FieldRule],
    options: ValidationOptions | None = None,
) -> None:
    """Validate a record against top-level rules.

    Args:
        value: Decoded record; must be a dict. Defaults are inserted in place.
        rules: Rule tree from ``parse_rules``
        options: Validation options (string length unit)

    Raises:
        ValidationError: On the first failing field
    """
    if kind_of(value) != ValueKind.OBJECT:
        raise ValidationError("Value is not object")

    for rule in rules:
        validate_field(value, rule, options)


def check_object(
    value: Any,
    rules: list[FieldRule],
    options: ValidationOptions | None = None,
) -> ValidationResult:
    """Like validate_object, but reports the outcome instead of raising."""
    try:
        validate_object(value, rules, options)
    except ValidationError as e:
        return ValidationResult(valid=False, error=str(e))
    return ValidationResult(valid=True)


def validate_field(
    container: Any,
    rule: FieldRule,
    options: ValidationOptions | None = None,
    label: str | None = None,
) -> None:
    """Validate one rule against its container.

    A named rule looks itself up in an object container. A nameless rule
    (the element rule of an array), or any rule given a non-object
    container, validates the container itself.

    Args:
        container: Object holding the field, or the value itself
        rule: The rule to apply
        options: Validation options
        label: Name used in error messages; defaults to the field name
    """
    options = options or DEFAULT_OPTIONS
    name = rule.field if label is None else label

    if isinstance(container, dict) and not rule.is_nameless:
        if rule.field not in container and rule.default is not None:
            container[rule.field] = copy.deepcopy(rule.default)
        value = container.get(rule.field, _MISSING)
    else:
        value = container

    if value is _MISSING:
        if rule.required:
            raise ValidationError(f"Missing required field {name}")
        return

    _check_type(value, rule, name)

    if rule.enum_values is not None:
        if not any(values_equal(value, allowed) for allowed in rule.enum_values):
            raise ValidationError(
                f"{name} value {value!r} not in enum {list(rule.enum_values)!r}"
            )

    for constraint in rule.constraints or ():
        if isinstance(constraint, RangeConstraint):
            _check_range(value, constraint, name, options)
        else:
            _check_regex(value, constraint, name)

    if rule.rule is not None:
        if isinstance(value, dict):
            validate_field(value, rule.rule, options, label=name)
        elif isinstance(value, list):
            for i, item in enumerate(value):
                validate_field(item, rule.rule, options, label=f"{name}[{i}]")

    if rule.children is not None:
        if not isinstance(value, dict):
            raise ValidationError(f"{name} is not object but has children")
        for child in rule.children:
            validate_field(value, child, options)


def _check_type(value: Any, rule: FieldRule, name: str) -> None:
    if rule.union_types is not None:
        if any(validate_type(value, t) is None for t in rule.union_types):
            return
        members = ", ".join(t.value for t in rule.union_types)
        raise ValidationError(
            f"{name} value {value!r} does not match union types [{members}]"
        )

    error = validate_type(value, rule.field_type)
    if error is not None:
        raise ValidationError(f"{name} value {value!r}: {error}")


def _numeric_bound(bound: Any, which: str, name: str) -> int | float:
    if kind_of(bound) in (ValueKind.INT, ValueKind.FLOAT):
        return bound
    raise ValidationError(f"Invalid {which} value type in range for {name}")


def _length_bound(bound: Any, which: str, name: str) -> int:
    kind = kind_of(bound)
    if kind == ValueKind.INT:
        if bound < 0:
            raise ValidationError(f"Invalid {which} length {bound} in range for {name}")
        return bound
    if kind == ValueKind.STRING:
        if not _LENGTH_BOUND.match(bound):
            raise ValidationError(f"Failed to parse '{bound}' as length bound")
        return int(bound)
    raise ValidationError(f"Invalid {which} value type in range for {name}")


def _within(n: int | float, low: int | float, high: int | float, constraint: RangeConstraint) -> bool:
    low_ok = n >= low if constraint.min_inclusive else n > low
    high_ok = n <= high if constraint.max_inclusive else n < high
    return low_ok and high_ok


def _check_range(
    value: Any,
    constraint: RangeConstraint,
    name: str,
    options: ValidationOptions,
) -> None:
    kind = kind_of(value)

    if kind in (ValueKind.INT, ValueKind.FLOAT):
        low = _numeric_bound(constraint.min, "min", name)
        high = _numeric_bound(constraint.max, "max", name)
        # int and float compare exactly; no conversion that can overflow
        if not _within(value, low, high, constraint):
            raise ValidationError(
                f"{name} value {value!r} out of range {constraint.describe()}"
            )

    elif kind == ValueKind.STRING:
        low = _length_bound(constraint.min, "min", name)
        high = _length_bound(constraint.max, "max", name)
        length = options.string_length(value)
        if not _within(length, low, high, constraint):
            raise ValidationError(
                f"{name} length {length} out of range {constraint.describe()}"
            )

    else:
        raise ValidationError(f"{name} cannot apply range constraint to {value!r}")


def _check_regex(value: Any, constraint: RegexConstraint, name: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{name} not string for regex")

    try:
        pattern = constraint.compiled
    except re.error as e:
        raise ValidationError(f"Invalid regex: {e}") from None

    if not pattern.search(value):
        raise ValidationError(f"{name} regex mismatch: {constraint.pattern}")
