"""Product entity: one issue of a title that the store stocks."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from comicshop.shared.dates import validate_yyyymmdd
from comicshop.shared.identity import EntityKind, allocate, identities
from comicshop.shared.money import to_money


class Product(BaseModel):
    """A catalogue record, identified by ``product_id`` and nothing else.

    Price and stock are the live values every open order reads. The
    edit flow replaces all descriptive fields at once through
    ``Catalogue.update``; ``product_id`` never changes.

    ``copies_available`` is not bounded below: submitting an order can
    push it under zero, and that is recorded rather than rejected.
    """

    model_config = ConfigDict(validate_assignment=True)

    product_id: int = Field(default_factory=allocate(EntityKind.PRODUCT), frozen=True, gt=0)
    title: str = Field(min_length=1, max_length=255)
    author: str = Field(default="", max_length=255)
    release_date: int
    issue_number: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)
    copies_available: int = 0

    @field_validator("release_date")
    @classmethod
    def release_date_must_be_calendar_date(cls, value):
        return validate_yyyymmdd(value)

    @field_validator("unit_price", mode="before")
    @classmethod
    def unit_price_to_cents(cls, value):
        return to_money(value)

    def model_post_init(self, __context):
        identities.observe(EntityKind.PRODUCT, self.product_id)

    @classmethod
    def create(cls, title, author, release_date, issue_number, unit_price, copies_available=0, product_id=None):
        values = {
            "title": title,
            "author": author,
            "release_date": release_date,
            "issue_number": issue_number,
            "unit_price": unit_price,
            "copies_available": copies_available,
        }
        if product_id is not None:
            values["product_id"] = product_id
        return cls(**values)

    @property
    def is_in_stock(self) -> bool:
        return self.copies_available > 0

    @property
    def display_name(self) -> str:
        return f"{self.title} #{self.issue_number}"
