from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, model_validator
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import ProductType


class PricingIn(CamelModel):
    currency_code: str = Field(..., min_length=3, max_length=8)
    selling_price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)

    @field_validator("currency_code")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()


class DescriptionDetailIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str


class OptionIn(CamelModel):
    option_type: str = Field(..., min_length=1, max_length=128)
    values: List[str] = []


class _ProductFields(CamelModel):
    product_images: Optional[List[str]] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    custom_product_url: Optional[str] = None
    seo_description: Optional[str] = None
    checkout_button_cta: Optional[str] = None
    unit: Optional[str] = None
    barcode: Optional[str] = None
    min_order_quantity: Optional[int] = Field(None, ge=1)
    max_order_quantity: Optional[int] = Field(None, ge=1)
    pre_order_release_date: Optional[datetime] = None
    embed_video_path: Optional[str] = None
    discovery_categories: Optional[List[str]] = None
    commission_percentage: Optional[float] = Field(None, ge=0, le=100)
    redirect_url: Optional[str] = None

    pricings: Optional[List[PricingIn]] = None
    description_details: Optional[List[DescriptionDetailIn]] = None
    options: Optional[List[OptionIn]] = None
    categories: Optional[List[int]] = None
    upsell_product_ids: Optional[List[int]] = None
    cross_sell_product_ids: Optional[List[int]] = None

    @model_validator(mode="after")
    def order_quantity_range(self):
        lo, hi = self.min_order_quantity, self.max_order_quantity
        if lo is not None and hi is not None and lo > hi:
            raise ValueError("minOrderQuantity cannot exceed maxOrderQuantity")
        return self


class ProductCreateIn(_ProductFields):
    name: str = Field(..., min_length=1, max_length=255)
    stock_quantity: int = Field(0, ge=0)
    type: ProductType = ProductType.REGULAR
    hide_from_homepage: bool = False
    is_pre_order: bool = False
    show_striked_out_original_price: bool = False
    auto_redirect_after_purchase: bool = False


class ProductUpdateIn(_ProductFields):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    stock_quantity: Optional[int] = Field(None, ge=0)
    type: Optional[ProductType] = None
    hide_from_homepage: Optional[bool] = None
    is_pre_order: Optional[bool] = None
    show_striked_out_original_price: Optional[bool] = None
    auto_redirect_after_purchase: Optional[bool] = None

    model_config = {"extra": "forbid"}


class ValidateUrlIn(CamelModel):
    custom_product_url: str = Field(..., min_length=1)
    product_id: Optional[int] = None


class PricingOut(CamelModel):
    id: int
    currency_code: str
    selling_price: float
    original_price: Optional[float] = None


class DescriptionDetailOut(CamelModel):
    id: int
    title: str
    description: str


class OptionOut(CamelModel):
    id: int
    option_type: str
    values: List[str]


class CategoryRefOut(CamelModel):
    id: int
    name: str


class ProductSummaryOut(CamelModel):
    id: int
    name: str
    product_images: List[str]
    stock_quantity: int
    pricings: List[PricingOut]


class StorefrontProductOut(ProductSummaryOut):
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    type: ProductType
    custom_product_url: Optional[str] = None
    checkout_button_cta: Optional[str] = None
    unit: Optional[str] = None
    min_order_quantity: Optional[int] = None
    max_order_quantity: Optional[int] = None
    is_pre_order: bool
    pre_order_release_date: Optional[datetime] = None
    show_striked_out_original_price: bool
    embed_video_path: Optional[str] = None
    description_details: List[DescriptionDetailOut]
    options: List[OptionOut]


class ProductOut(StorefrontProductOut):
    store_id: int
    seo_description: Optional[str] = None
    hide_from_homepage: bool
    barcode: Optional[str] = None
    discovery_categories: List[str]
    commission_percentage: Optional[float] = None
    auto_redirect_after_purchase: bool
    redirect_url: Optional[str] = None
    categories: List[CategoryRefOut] = []
    upsell_product_ids: List[int] = []
    cross_sell_product_ids: List[int] = []
    created_at: datetime
    updated_at: datetime
