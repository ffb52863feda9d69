# ===== IMPORTS & DEPENDENCIES =====
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from bs4 import Tag

# ===== CONFIGURATION & CONSTANTS =====
T = TypeVar('T')

# ===== UTILITY FUNCTIONS =====

def first_match(strategies: Iterable[Callable[[], Optional[T]]]) -> Optional[T]:
    """Runs strategies in order and returns the first result that is not None or empty."""
    for strategy in strategies:
        value = strategy()
        if value is not None and value != '':
            return value
    return None


def select_text(root: Tag, selector: str) -> Optional[str]:
    """Stripped text of the first element matching the selector, or None."""
    element = root.select_one(selector)
    if element is None:
        return None
    text = element.get_text(' ', strip=True)
    return text or None


def select_attr(root: Tag, selector: str, attribute: str) -> Optional[str]:
    """Stripped attribute value of the first element matching the selector, or None."""
    element = root.select_one(selector)
    if element is None:
        return None
    value = element.get(attribute)
    if isinstance(value, list):
        value = ' '.join(value)
    if not value:
        return None
    return value.strip() or None


def first_text(root: Tag, selectors: Sequence[str]) -> Optional[str]:
    """Text of the first selector in the chain that yields non-empty text."""
    return first_match(lambda s=selector: select_text(root, s) for selector in selectors)


def first_attr(root: Tag, selectors: Sequence[str], attribute: str) -> Optional[str]:
    """Attribute of the first selector in the chain that yields a non-empty value."""
    return first_match(lambda s=selector: select_attr(root, s, attribute) for selector in selectors)
