from contentkit.adapters.markup.soup import (
    DEFAULT_MAX_DEPTH,
    PRESERVE_WHITESPACE_TAGS,
    RAW_TEXT_ELEMENTS,
    VOID_ELEMENTS,
    SoupMarkupAdapter,
    create_markup_adapter,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "PRESERVE_WHITESPACE_TAGS",
    "RAW_TEXT_ELEMENTS",
    "VOID_ELEMENTS",
    "SoupMarkupAdapter",
    "create_markup_adapter",
]
