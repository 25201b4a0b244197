"""Catalog data model."""

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=100)
    price = fields.FloatField(default=0.0)
    discount = fields.FloatField(default=0.0, description="Percentage, 0 to 100")
    stock = fields.IntField(default=0)
    # Allowed values are enforced by ProductCategory / ProductStatus in schemas.py
    category = fields.CharField(max_length=50, db_index=True)
    status = fields.CharField(max_length=20, default="Active", db_index=True)
    image = fields.CharField(max_length=255, default="no-photo.jpg")
    description = fields.TextField(null=True)

    created_by: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User",
        related_name="products",
        on_delete=fields.SET_NULL,
        null=True,
    )

    order_items: fields.ReverseRelation["OrderItem"]

    @property
    def discounted_price(self) -> float:
        return round(self.price * (1 - (self.discount or 0) / 100), 2)

    def __str__(self):
        return f"{self.name} (Stock: {self.stock}, Price: ${self.price:.2f})"

    class Meta:
        table = "products"
