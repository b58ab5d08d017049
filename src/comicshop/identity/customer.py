"""Customer record attached to an order at checkout.

Checkout form values are stored as entered. Nothing here verifies them,
looks customers up, or merges duplicates.
"""

from pydantic import BaseModel, ConfigDict, Field

from comicshop.shared.identity import EntityKind, allocate, identities


class MailingAddress(BaseModel):
    """A single-line street address. There is no secondary address line."""

    model_config = ConfigDict(frozen=True)

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""

    def as_lines(self) -> list[str]:
        locality = " ".join(part for part in (f"{self.city}," if self.city else "", self.state, self.postal_code) if part)
        return [line for line in (self.street, locality) if line]


class Customer(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    customer_id: int = Field(default_factory=allocate(EntityKind.CUSTOMER), frozen=True, gt=0)
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    address: MailingAddress = Field(default_factory=MailingAddress)

    def model_post_init(self, __context):
        identities.observe(EntityKind.CUSTOMER, self.customer_id)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
