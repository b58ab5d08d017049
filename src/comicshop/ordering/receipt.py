"""Receipt data for a submitted (or still open) order."""

from decimal import Decimal

from pydantic import BaseModel

from comicshop.ordering.order import Order, ProductLookup
from comicshop.shared.dates import describe_ship_date, from_yyyymmdd
from comicshop.shared.money import format_money


class ReceiptLine(BaseModel):
    product_id: int
    description: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class Receipt(BaseModel):
    order_id: int
    customer_name: str
    order_date: str
    ship_date: str
    status: str
    lines: list[ReceiptLine]
    total: Decimal
    currency: str = "USD"

    def as_text(self) -> str:
        rows = [
            f"Order #{self.order_id}  {self.order_date}",
            f"Customer: {self.customer_name or 'Walk-in'}",
        ]
        for line in self.lines:
            rows.append(
                f"{line.quantity:>3} x {line.description:<40} "
                f"{format_money(line.unit_price, self.currency):>10} {format_money(line.line_total, self.currency):>10}"
            )
        rows.append(f"Total: {format_money(self.total, self.currency)}")
        rows.append(f"Shipping: {self.ship_date}")
        return "\n".join(rows)


def build_receipt(order: Order, lookup: ProductLookup, currency: str = "USD") -> Receipt:
    """Lines come out in the order they were added to the cart."""
    lines = []
    for item in order.items:
        product = lookup(item.product_id)
        if product is not None:
            description = product.display_name
            live_price = product.unit_price
        else:
            description = f"Product {item.product_id} (no longer stocked)"
            live_price = Decimal("0.00")

        lines.append(
            ReceiptLine(
                product_id=item.product_id,
                description=description,
                quantity=item.quantity,
                unit_price=item.unit_price if item.unit_price is not None else live_price,
                line_total=item.line_total(lookup),
            )
        )

    return Receipt(
        order_id=order.order_id,
        customer_name=order.customer.full_name if order.customer else "",
        order_date=from_yyyymmdd(order.order_date).isoformat(),
        ship_date=describe_ship_date(order.shipped_date),
        status=order.status.value,
        lines=lines,
        total=order.total(),
        currency=currency,
    )
