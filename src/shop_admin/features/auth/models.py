from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(max_length=27, unique=True, default=generate_ksuid, db_index=True)
    full_name = fields.CharField(max_length=50)
    mobile_number = fields.CharField(max_length=10, unique=True, db_index=True)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharField(max_length=20, default=ROLE_USER)  # "user" or "admin"
    is_active = fields.BooleanField(default=True)

    orders: fields.ReverseRelation["Order"]
    products: fields.ReverseRelation["Product"]

    def __str__(self):
        return f"{self.full_name} <{self.mobile_number}> ({self.role})"

    class Meta:
        table = "users"
