from pydantic import Field
from typing import List, Optional
import datetime
import enum

from ...common.schemas import CamelModel


class ProductCategory(str, enum.Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME_KITCHEN = "Home & Kitchen"
    BEAUTY = "Beauty"
    SPORTS = "Sports"
    OTHER = "Other"


class ProductStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProductBase(CamelModel):
    name: str = Field(..., min_length=2, max_length=100, description="Name of the product")
    price: float = Field(..., ge=0, description="Unit price")
    discount: float = Field(default=0.0, ge=0, le=100, description="Discount percentage")
    stock: int = Field(..., ge=0, description="Units in stock")
    category: ProductCategory
    status: ProductStatus = ProductStatus.ACTIVE
    description: Optional[str] = Field(None, max_length=1000)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0, le=100)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    status: Optional[ProductStatus] = None
    description: Optional[str] = Field(None, max_length=1000)


class ProductPublic(ProductBase):
    public_id: str = Field(..., description="Public unique identifier for the product (KSUID)")
    discounted_price: float
    image: str
    created_at: datetime.datetime
    updated_at: datetime.datetime


class ProductResponse(CamelModel):
    success: bool = True
    data: ProductPublic


class ProductListResponse(CamelModel):
    success: bool = True
    count: int
    total: int
    page: int
    limit: int
    data: List[ProductPublic]
