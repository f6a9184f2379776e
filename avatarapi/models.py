"""Pydantic models for avatar items and teacher configuration records.

Field names are snake_case in Python and camelCase on the wire and on disk
(`imageUrl`, `slotRules`, `updatedAt`), matching what the avatar front-end
sends.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, NonNegativeInt
from pydantic.alias_generators import to_camel


# Ints stay ints so saved prices come back exactly as sent; inf/nan are not JSON
Price = Union[NonNegativeInt, Annotated[FiniteFloat, Field(ge=0)]]


class Item(BaseModel):
    """Purchasable avatar item occupying one display slot."""

    # Unknown keys sent by the front-end are kept as-is
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    name: str
    price: Price
    image_url: str
    slot: str


class ConfigurationRecord(BaseModel):
    """Everything stored for one teacher identifier.

    `items` and `slot_rules` may each be absent, in which case the built-in
    default catalog / default badge table applies.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[Item] | None = None
    slot_rules: dict[str, list[str]] | None = None
    updated_at: datetime | None = None

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON shape written to teachers.json."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DEFAULT_CATALOG: tuple[Item, ...] = (
    Item(id="hat_basic", name="Basic Cap", price=100, image_url="/static/items/hat_basic.png", slot="A"),
    Item(id="glasses_round", name="Round Glasses", price=150, image_url="/static/items/glasses_round.png", slot="B"),
    Item(id="shirt_stripe", name="Striped Shirt", price=200, image_url="/static/items/shirt_stripe.png", slot="C"),
    Item(id="pants_jeans", name="Blue Jeans", price=200, image_url="/static/items/pants_jeans.png", slot="D"),
    Item(id="shoes_sneakers", name="Sneakers", price=250, image_url="/static/items/shoes_sneakers.png", slot="E"),
    Item(id="pet_puppy", name="Puppy Companion", price=500, image_url="/static/items/pet_puppy.png", slot="F"),
)


def default_catalog() -> list[Item]:
    """Fresh copy of the built-in catalog, in display order."""
    return [item.model_copy() for item in DEFAULT_CATALOG]
