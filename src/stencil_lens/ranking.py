# --- Sort keys for completion entries ------------------------------------------
#
# A key is "<category letter>[<lifecycle letter>]-<name>", so plain string
# ordering groups entries by category in CATEGORY_ORDER, then by name, except
# lifecycle methods which follow the order they run in.

from string import ascii_lowercase
from typing import Union

from stencil_lens.constants import COMPONENT_LIFECYCLE_METHODS
from stencil_lens.models.component_models import CATEGORY_ORDER, Category

LAST_LETTER = ascii_lowercase[-1]


def _letter(sequence, value) -> str:
    try:
        return ascii_lowercase[list(sequence).index(value)]
    except ValueError:
        return LAST_LETTER


def sort_text(category: Union[Category, str], name: str) -> str:
    """Sort key for a member of the given category (unknown categories sort last)."""
    try:
        category = Category(category)
    except ValueError:
        return f"{LAST_LETTER}-{name}"

    prefix = _letter(CATEGORY_ORDER, category)
    if category is Category.LIFECYCLE:
        prefix += _letter(COMPONENT_LIFECYCLE_METHODS, name)
    return f"{prefix}-{name}"
