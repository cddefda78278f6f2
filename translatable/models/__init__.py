from .content import Content, ContentStatus
from .content_translation import ContentTranslation

__all__ = [
    "Content",
    "ContentStatus",
    "ContentTranslation",
]
