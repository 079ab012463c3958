"""
Translation Models for Money L10n

DESIGN DECISION: Placeholder maps are built per call and thrown away
after restoration. Only CacheEntry outlives a localization call.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProtectedMessage(BaseModel):
    """
    Text with currency glyphs swapped for ASCII placeholders.

    ``placeholder_map`` maps placeholder -> original glyph and only
    contains glyphs that were actually present in the input.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    placeholder_map: dict[str, str] = Field(default_factory=dict)

    @property
    def has_placeholders(self) -> bool:
        return bool(self.placeholder_map)


class CacheEntry(BaseModel):
    """
    A cached translation.

    Content-addressed: ``key`` is derived from the source text only,
    so the same source always lands on the same entry.
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(
        ...,
        min_length=1,
        description="Hash-derived key of the source text"
    )
    value: str = Field(
        ...,
        description="Translated text"
    )
