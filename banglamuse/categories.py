"""Content categories and length options offered by the studio."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CategoryId(str, Enum):
    """Content category enumeration."""

    ARTICLE = "article"
    FICTION = "fiction"
    POETRY = "poetry"
    MEMOIR = "memoir"


class LengthOption(str, Enum):
    """Target length band for generated content."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Category(BaseModel):
    """Display metadata for a content category."""

    model_config = ConfigDict(frozen=True)

    id: CategoryId
    label: str
    bn_label: str
    description: str


CATEGORIES: dict[CategoryId, Category] = {
    CategoryId.ARTICLE: Category(
        id=CategoryId.ARTICLE,
        label="Article",
        bn_label="প্রবন্ধ",
        description="তথ্যবহুল ও বিশ্লেষণধর্মী লেখা",
    ),
    CategoryId.FICTION: Category(
        id=CategoryId.FICTION,
        label="Fiction",
        bn_label="গল্প",
        description="কাল্পনিক ও সৃজনশীল গল্প",
    ),
    CategoryId.POETRY: Category(
        id=CategoryId.POETRY,
        label="Poetry",
        bn_label="কবিতা",
        description="ছন্দ ও আবেগের বহিঃপ্রকাশ",
    ),
    CategoryId.MEMOIR: Category(
        id=CategoryId.MEMOIR,
        label="Memoir",
        bn_label="স্মৃতিচারণ",
        description="অতীতের স্মৃতি ও অভিজ্ঞতা",
    ),
}

LENGTH_LABELS: dict[LengthOption, str] = {
    LengthOption.SHORT: "ছোট (Short)",
    LengthOption.MEDIUM: "মাঝারি (Medium)",
    LengthOption.LONG: "বড় (Long)",
}

# Approximate word count requested from the model for each length band
LENGTH_WORD_COUNTS: dict[LengthOption, int] = {
    LengthOption.SHORT: 150,
    LengthOption.MEDIUM: 300,
    LengthOption.LONG: 600,
}


def get_category(category_id: CategoryId | str) -> Category:
    """Look up category metadata by id.

    Raises:
        ValueError: If the id is not a known category.
    """
    return CATEGORIES[CategoryId(category_id)]
