"""
Query pipeline for GET /<collection>.

Stages always run in the same order:
  conditions -> sorting -> range or pagination -> embed

Values are compared with one coercion rule everywhere: if both sides are
numbers (or numeric strings) they compare numerically, otherwise both are
rendered as JSON-ish text and compared as strings. A field missing from a
record is never equal to, less than or greater than anything.
"""
from __future__ import annotations

import json
import math
import re
from functools import cmp_to_key
from typing import Any, Callable, Iterable

from werkzeug.datastructures import MultiDict

RESERVED_KEYS = frozenset({"_sort", "_start", "_end", "_limit", "_page", "_per_page", "_embed"})
RANGE_KEYS = ("_start", "_end", "_limit")
DEFAULT_PER_PAGE = 10

# Not anchored: the first operator-looking run anywhere in the expression wins
OPERATOR_RE = re.compile(r"[><=!]=?")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_MISSING = object()


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equal(a, b) -> bool:
    """Equality without cross-type coercion (1 matches 1.0, never True or "1")."""
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def leading_int(text) -> int | None:
    """Integer prefix of ``text`` ("12abc" -> 12), or None when there is none."""
    m = _LEADING_INT_RE.match(str(text))
    return int(m.group(1)) if m else None


def _as_number(value):
    if is_number(value):
        return value
    if isinstance(value, str) and value.strip():
        try:
            n = float(value)
        except ValueError:
            return None
        return None if math.isnan(n) else n
    return None


def _as_text(value) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if is_number(value):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def compare_values(a, b) -> int:
    """Three-way comparison under the coercion rule; missing values tie."""
    if a is _MISSING or b is _MISSING:
        return 0
    left, right = _as_number(a), _as_number(b)
    if left is None or right is None:
        left, right = _as_text(a), _as_text(b)
    return (left > right) - (left < right)


def _field(record, name):
    if isinstance(record, dict):
        return record.get(name, _MISSING)
    return _MISSING


def _equal(a, b) -> bool:
    return a is not _MISSING and compare_values(a, b) == 0


def _ordered(test: Callable[[int], bool]):
    return lambda a, b: a is not _MISSING and test(compare_values(a, b))


OPERATORS: dict[str, Callable[[Any, str], bool]] = {
    "=": _equal,
    "==": _equal,
    "!=": lambda a, b: not _equal(a, b),
    "<": _ordered(lambda c: c < 0),
    "<=": _ordered(lambda c: c <= 0),
    ">": _ordered(lambda c: c > 0),
    ">=": _ordered(lambda c: c >= 0),
}


def parse_condition(key: str, value: str) -> tuple[str, str, str]:
    """
    Split one query pair into (field, operator, operand).

    A query string is split on its first "=", so ``age>=30`` arrives as
    ("age>", "30") and ``done==true`` as ("done", "=true"). The pair is joined
    back into its raw expression before looking for the operator.
    """
    expression = f"{key}={value}" if value != "" else key
    m = OPERATOR_RE.search(expression)
    if m is None:
        return key, "==", value
    return expression[:m.start()], m.group(0), expression[m.end():]


def _pairs(args) -> Iterable[tuple[str, str]]:
    return MultiDict(args).items(multi=True)


def apply_conditions(items: list, args) -> list:
    conditions = [parse_condition(k, v) for k, v in _pairs(args) if k not in RESERVED_KEYS]
    if not conditions:
        return list(items)

    def _matches(record) -> bool:
        for field, op, operand in conditions:
            test = OPERATORS.get(op)
            # Unknown operators (a lone "!") reject every record
            if test is None or not test(_field(record, field), operand):
                return False
        return True

    return [r for r in items if _matches(r)]


def apply_sorting(items: list, sort_param: str | None) -> list:
    if not sort_param:
        return items

    keys = []
    for raw in sort_param.split(","):
        if not raw:
            continue
        if raw.startswith("-"):
            keys.append((raw[1:], -1))
        else:
            keys.append((raw, 1))

    def _cmp(a, b) -> int:
        for name, direction in keys:
            c = compare_values(_field(a, name), _field(b, name))
            if c:
                return c * direction
        return 0

    # sorted() is stable, ties keep their filtered order
    return sorted(items, key=cmp_to_key(_cmp))


def _int_arg(args: MultiDict, key: str, default):
    raw = args.get(key)
    if raw is None or raw == "":
        return default
    n = leading_int(raw)
    return 0 if n is None else n


def apply_range(items: list, args) -> list:
    args = MultiDict(args)
    start = _int_arg(args, "_start", 0)
    end = _int_arg(args, "_end", None)
    if not end:
        limit = _int_arg(args, "_limit", None)
        end = start + limit if limit is not None else len(items)
    return items[start:end]


def apply_pagination(items: list, args, default_per_page: int = DEFAULT_PER_PAGE) -> list:
    args = MultiDict(args)
    page = _int_arg(args, "_page", 1)
    per_page = _int_arg(args, "_per_page", default_per_page)
    start = (page - 1) * per_page
    return items[start:start + per_page]


def apply_embed(items: list, embed: str, resolve: Callable[[str], Any]) -> list:
    """Attach ``embed`` records whose postId equals each item's Id. Items are copied."""
    related = resolve(embed)
    if not isinstance(related, list):
        return items

    out = []
    for item in items:
        if isinstance(item, dict):
            ident = item.get("Id", _MISSING)
            children = [
                r for r in related
                if ident is not _MISSING and strict_equal(_field(r, "postId"), ident)
            ]
            item = {**item, embed: children}
        out.append(item)
    return out


def run_pipeline(items: list, args, resolve: Callable[[str], Any],
                 default_per_page: int = DEFAULT_PER_PAGE) -> list:
    args = MultiDict(args)

    result = apply_conditions(items, args)
    result = apply_sorting(result, args.get("_sort"))
    if any(k in args for k in RANGE_KEYS):
        result = apply_range(result, args)
    else:
        result = apply_pagination(result, args, default_per_page)

    embed = args.get("_embed")
    if embed:
        result = apply_embed(result, embed, resolve)
    return result
