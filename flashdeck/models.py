"""
Card content value objects stored inside a deck.

They carry no behaviour of their own; the archive layer only needs to
persist and restore them in order.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CardField(BaseModel):
    """
    Data which should be shown on a flashcard's sides.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    data: str = Field(..., description="Raw field content.")


class CardSide(BaseModel):
    """
    One rendered side of a flashcard.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    data: str = Field(..., description="Rendered side content.")


class Flashcard(BaseModel):
    """
    A small container of information which should be memorized.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    fields: List[CardField] = Field(
        default_factory=list,
        description="Card data, referenced by the sides.",
    )
    sides: List[CardSide] = Field(
        default_factory=list,
        description="Sides in display order.",
    )
    auto_rendering: bool = Field(
        default=False,
        description="Whether sides are rendered from fields automatically.",
    )
