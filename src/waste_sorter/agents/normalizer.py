"""
normalizer.py

Turns a vision model's free-text answer into a ClassificationResult.

The prompt asks for
    [ITEM: ...]
    [CATEGORY: recycle|compost|trash]
    [EXPLANATION: ...]
but models do not always comply. When the EXPLANATION field is missing the
whole answer becomes the explanation and the category is re-derived from
keywords, overriding any bracketed CATEGORY.
"""

import re

from waste_sorter.logger import get_logger
from waste_sorter.models import Category, ClassificationResult, color_for

logger = get_logger(__name__)

DEFAULT_ITEM = "Unidentified item"
DEFAULT_CATEGORY = Category.TRASH
DEFAULT_EXPLANATION = "Unable to determine proper disposal method."

ITEM_PATTERN = re.compile(r"\[ITEM:?\s*(.*?)\]", re.IGNORECASE | re.ASCII)
CATEGORY_PATTERN = re.compile(r"\[CATEGORY:?\s*(recycle|compost|trash)\]", re.IGNORECASE | re.ASCII)
EXPLANATION_PATTERN = re.compile(r"\[EXPLANATION:?\s*(.*?)\](?:\s|\Z)", re.IGNORECASE | re.DOTALL | re.ASCII)

CATEGORY_TOKENS = {category.value: category for category in Category}

# Checked in order, first hit wins
FALLBACK_KEYWORDS = (
    ("recycle", Category.RECYCLE),
    ("compost", Category.COMPOST),
)


def _field(pattern: re.Pattern, text: str):
    """First capture of `pattern`, trimmed; None when absent or blank."""
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def categorize_by_keywords(text: str) -> Category:
    lowered = text.lower()
    for keyword, category in FALLBACK_KEYWORDS:
        if keyword in lowered:
            return category
    return DEFAULT_CATEGORY


def normalize_response(response: str) -> ClassificationResult:
    """
    Extract item, category and explanation from a raw model answer.

    Args:
        response: Free-text answer returned by the provider.

    Returns:
        ClassificationResult with the presentation color derived from the category.
    """
    text = response or ""

    item = _field(ITEM_PATTERN, text) or DEFAULT_ITEM

    category = DEFAULT_CATEGORY
    category_token = _field(CATEGORY_PATTERN, text)
    if category_token:
        category = CATEGORY_TOKENS.get(category_token.lower(), category)

    explanation = _field(EXPLANATION_PATTERN, text)
    if explanation is None:
        logger.warning("Model answer has no EXPLANATION field, falling back to keyword scan.")
        explanation = text.strip()
        category = categorize_by_keywords(text)

    return ClassificationResult(
        item=item,
        category=category,
        explanation=explanation,
        color=color_for(category),
    )
