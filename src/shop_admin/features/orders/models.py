"""Order data read by the analytics reports.

Orders are never written through this service's API; they arrive from the
storefront. Line items keep a snapshot of the product name and unit price
so reports stay correct after the catalog changes.
"""

from tortoise import fields, models
from ...common.models import TimestampMixin, generate_ksuid

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
PAYMENT_METHODS = ("cod", "card", "upi", "netbanking")
CANCELLED = "cancelled"


class Order(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    user: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="orders", on_delete=fields.SET_NULL, null=True
    )

    payment_method = fields.CharField(max_length=20, default="cod")
    items_price = fields.FloatField(default=0.0)
    tax_price = fields.FloatField(default=0.0)
    shipping_price = fields.FloatField(default=0.0)
    total_amount = fields.FloatField(default=0.0)
    is_paid = fields.BooleanField(default=False)
    paid_at = fields.DatetimeField(null=True)
    is_delivered = fields.BooleanField(default=False)
    delivered_at = fields.DatetimeField(null=True)
    status = fields.CharField(max_length=20, default="pending", db_index=True)

    items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"Order {self.public_id} - {self.total_amount:.2f} - Status: {self.status}"

    class Meta:
        table = "orders"


class OrderItem(models.Model):  # No TimestampMixin, dated by its order
    id = fields.IntField(primary_key=True)

    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order",
        related_name="items",
        on_delete=fields.CASCADE,
    )
    product: fields.ForeignKeyRelation["Product"] = fields.ForeignKeyField(
        "models.Product",
        related_name="order_items",
        on_delete=fields.SET_NULL,
        null=True,
    )

    name = fields.CharField(max_length=100)
    quantity = fields.IntField()
    price = fields.FloatField()
    image = fields.CharField(max_length=255, default="no-image.jpg")

    def __str__(self):
        return f"{self.quantity} x {self.name} @ {self.price:.2f}"

    class Meta:
        table = "order_items"
