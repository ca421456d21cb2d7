"""
Ordered rule cascades: the first rule that returns a value wins.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')


class ClassificationError(ValueError):
    """Raised when the heuristics cannot produce a usable record."""


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A named extractor. Returns None when it does not apply."""
    name: str
    extract: Callable[..., Optional[T]]


def first_match(rules: Sequence[Rule[T]], *args: Any) -> Tuple[Optional[str], Optional[T]]:
    """
    Evaluate rules in order without backtracking.

    Returns:
        (rule name, value) of the first rule that matched, or (None, None)
    """
    for rule in rules:
        value = rule.extract(*args)
        if value is not None:
            return rule.name, value
    return None, None


def dots_to_spaces(text: str) -> str:
    return re.sub(r'\s+', ' ', text.replace('.', ' ')).strip()


def clean_name(text: str) -> str:
    """Dots and underscores to spaces, whitespace collapsed."""
    text = text.replace('.', ' ').replace('_', ' ')
    return re.sub(r'\s+', ' ', text).strip()
