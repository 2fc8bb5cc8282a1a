import enum
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, Text, UniqueConstraint
from sqlmodel import Column, SQLModel, Field, Relationship, String
from backoffice.common.utils import now


class KycStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class KycDocumentType(str, enum.Enum):
    GOVERNMENT_ID = "GOVERNMENT_ID"
    INCORPORATION_CERTIFICATE = "INCORPORATION_CERTIFICATE"
    ARTICLE_OF_ASSOCIATION = "ARTICLE_OF_ASSOCIATION"
    PROOF_OF_ADDRESS = "PROOF_OF_ADDRESS"
    SELFIE_WITH_ID = "SELFIE_WITH_ID"
    BANK_STATEMENT = "BANK_STATEMENT"
    ADDITIONAL = "ADDITIONAL"


class ProductType(str, enum.Enum):
    REGULAR = "REGULAR"
    VARIANT = "VARIANT"


class ContactType(str, enum.Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    WORK = "WORK"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"


class InvoiceStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CARD = "CARD"
    MOBILE_MONEY = "MOBILE_MONEY"
    OTHER = "OTHER"


class AdjustmentType(str, enum.Enum):
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"


class UnitStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def _created_at():
    return Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))


def _updated_at():
    return Field(default_factory=now,
                 sa_column=Column(DateTime(timezone=True), nullable=False, default=now, onupdate=now))


def _store_fk():
    return Field(sa_column=Column(ForeignKey("store.id", ondelete="CASCADE"), index=True, nullable=False))


# ----------------------------------------------------------------------------------------------
# identity

class Users(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(sa_column=Column(String(320), nullable=False, unique=True, index=True))
    password_hash: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    first_name: str = Field(sa_column=Column(String(128), nullable=False))
    last_name: str = Field(sa_column=Column(String(128), nullable=False))
    full_name: Optional[str] = Field(default=None, sa_column=Column(String(256), nullable=True))
    username: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True, unique=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    how_did_you_find_us: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    profile_photo_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    is_verified: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    verification_code: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))
    verification_code_expires: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True))
    reset_password_token: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))
    reset_password_expires: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True))
    refresh_token: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    last_active: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class Store(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False))
    business_name: str = Field(sa_column=Column(String(255), nullable=False))
    store_url: str = Field(sa_column=Column(String(63), nullable=False, unique=True, index=True))
    country: str = Field(sa_column=Column(String(128), nullable=False))
    currency: str = Field(default="USD", sa_column=Column(String(8), nullable=False, default="USD"))
    logo_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    contact_email: Optional[str] = Field(default=None, sa_column=Column(String(320), nullable=True))
    contact_phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    is_launched: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    launched_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class Customer(SQLModel, table=True):
    """Shopper identity scoped to one store; email is unique per store only."""
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    email: Optional[str] = Field(default=None, sa_column=Column(String(320), nullable=True))
    password_hash: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    first_name: str = Field(sa_column=Column(String(128), nullable=False))
    last_name: str = Field(sa_column=Column(String(128), nullable=False))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    instagram_handle: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    additional_info: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))

    shipping_address: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    shipping_city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    shipping_state: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    shipping_country: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    shipping_zip_code: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    billing_address: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    billing_city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    billing_state: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    billing_country: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    billing_zip_code: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    same_as_shipping_address: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    subscribed_to_newsletter: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    customer_group_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("customergroup.id", ondelete="SET NULL"), index=True, nullable=True))

    is_verified: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    verification_code: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))
    verification_code_expires: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True))
    reset_password_token: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))
    reset_password_expires: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True))
    refresh_token: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    last_active: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    __table_args__ = (UniqueConstraint("store_id", "email", name="uq_customer_store_id_email"),)


class CustomerGroup(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


# ----------------------------------------------------------------------------------------------
# store configuration

class ShippingConfig(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = Field(sa_column=Column(ForeignKey("store.id", ondelete="CASCADE"), unique=True, nullable=False))
    enabled: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
    flat_rate: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    free_shipping_threshold: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    processing_days: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    updated_at: datetime = _updated_at()


class ShippingMethod(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(128), nullable=False))
    price: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    estimated_delivery: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    is_active: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))


class StoreSettings(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = Field(sa_column=Column(ForeignKey("store.id", ondelete="CASCADE"), unique=True, nullable=False))
    tagline: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    support_email: Optional[str] = Field(default=None, sa_column=Column(String(320), nullable=True))
    support_phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    primary_color: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))
    show_out_of_stock: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
    updated_at: datetime = _updated_at()


class Location(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    location_name: str = Field(sa_column=Column(String(255), nullable=False))
    address: str = Field(sa_column=Column(String(512), nullable=False))
    city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    state: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    country: str = Field(sa_column=Column(String(128), nullable=False))
    is_primary: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


# ----------------------------------------------------------------------------------------------
# catalog

class ProductCategory(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    category_id: int = Field(sa_column=Column(ForeignKey("category.id", ondelete="CASCADE"), index=True, nullable=False))

    __table_args__ = (UniqueConstraint("product_id", "category_id", name="uq_product_category_product_id_category_id"),)

    category: "Category" = Relationship(back_populates="product_links", sa_relationship_kwargs={"lazy": "selectin"})
    product: "Product" = Relationship(back_populates="category_links", sa_relationship_kwargs={"lazy": "raise"})


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    image: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    # loaded explicitly where needed (listing, storefront)
    product_links: List["ProductCategory"] = Relationship(back_populates="category",
                                                         sa_relationship_kwargs={"lazy": "raise"})


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    product_images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    short_description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    long_description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    stock_quantity: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    type: ProductType = Field(default=ProductType.REGULAR, nullable=False)
    custom_product_url: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True, index=True))
    seo_description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    checkout_button_cta: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    hide_from_homepage: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    unit: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    barcode: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    min_order_quantity: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    max_order_quantity: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    is_pre_order: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    pre_order_release_date: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True))
    show_striked_out_original_price: bool = Field(default=False,
        sa_column=Column(Boolean, nullable=False, default=False))
    embed_video_path: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    discovery_categories: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    commission_percentage: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    auto_redirect_after_purchase: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    redirect_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    pricings: List["ProductPricing"] = Relationship(sa_relationship_kwargs={"lazy": "selectin",
                                                                            "order_by": "ProductPricing.id"})
    description_details: List["ProductDescriptionDetail"] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin", "order_by": "ProductDescriptionDetail.id"})
    options: List["ProductOption"] = Relationship(sa_relationship_kwargs={"lazy": "selectin",
                                                                          "order_by": "ProductOption.id"})
    category_links: List["ProductCategory"] = Relationship(back_populates="product",
        sa_relationship_kwargs={"lazy": "selectin", "order_by": "ProductCategory.id"})
    upsell_products: List["ProductUpsell"] = Relationship(sa_relationship_kwargs={
        "lazy": "selectin", "foreign_keys": "[ProductUpsell.product_id]", "order_by": "ProductUpsell.id"})
    cross_sell_products: List["ProductCrossSell"] = Relationship(sa_relationship_kwargs={
        "lazy": "selectin", "foreign_keys": "[ProductCrossSell.product_id]", "order_by": "ProductCrossSell.id"})


class ProductPricing(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    currency_code: str = Field(sa_column=Column(String(8), nullable=False))
    selling_price: float = Field(sa_column=Column(Float, nullable=False))
    original_price: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))

    __table_args__ = (UniqueConstraint("product_id", "currency_code", name="uq_product_pricing_product_id_currency"),)


class ProductDescriptionDetail(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    title: str = Field(sa_column=Column(String(255), nullable=False))
    description: str = Field(sa_column=Column(Text(), nullable=False))


class ProductOption(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    option_type: str = Field(sa_column=Column(String(128), nullable=False))
    values: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))


class ProductUpsell(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    upsell_product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"),
                                                    index=True, nullable=False))

    __table_args__ = (UniqueConstraint("product_id", "upsell_product_id", name="uq_product_upsell_pair"),)


class ProductCrossSell(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    cross_sell_product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"),
                                                        index=True, nullable=False))

    __table_args__ = (UniqueConstraint("product_id", "cross_sell_product_id", name="uq_product_cross_sell_pair"),)


class Brand(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    image_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class ProductVariant(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    has_multiple_options: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    options: List["ProductVariantOption"] = Relationship(sa_relationship_kwargs={
        "lazy": "selectin", "order_by": "ProductVariantOption.id"})


class ProductVariantOption(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    variant_id: int = Field(sa_column=Column(ForeignKey("productvariant.id", ondelete="CASCADE"),
                                             index=True, nullable=False))
    name: str = Field(sa_column=Column(String(128), nullable=False))


class ProductGroup(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    image_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class Unit(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(64), nullable=False))
    status: UnitStatus = Field(default=UnitStatus.ACTIVE, nullable=False)
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


# ----------------------------------------------------------------------------------------------
# inventory

class Warehouse(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    address: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    state: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    country: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    zip_code: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    is_active: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class Stock(SQLModel, table=True):
    """On-hand quantity of one product in one warehouse."""
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    warehouse_id: int = Field(sa_column=Column(ForeignKey("warehouse.id", ondelete="CASCADE"),
                                               index=True, nullable=False))
    quantity: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    __table_args__ = (UniqueConstraint("product_id", "warehouse_id", name="uq_stock_product_id_warehouse_id"),)

    product: "Product" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    warehouse: "Warehouse" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class StockAdjustment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    warehouse_id: int = Field(sa_column=Column(ForeignKey("warehouse.id", ondelete="CASCADE"),
                                               index=True, nullable=False))
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    reference_no: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    adjustment_date: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False))
    quantity: int = Field(sa_column=Column(Integer, nullable=False))
    # change actually applied to stock; differs from quantity when a decrease hit zero
    applied_change: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    type: AdjustmentType = Field(nullable=False)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    created_by: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    product: "Product" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    warehouse: "Warehouse" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


# ----------------------------------------------------------------------------------------------
# suppliers & invoices

class Supplier(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    name: str = Field(sa_column=Column(String(255), nullable=False))
    supplier_code: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    image_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    is_active: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    emails: List["SupplierEmail"] = Relationship(sa_relationship_kwargs={"lazy": "selectin",
                                                                         "order_by": "SupplierEmail.id"})
    phones: List["SupplierPhone"] = Relationship(sa_relationship_kwargs={"lazy": "selectin",
                                                                         "order_by": "SupplierPhone.id"})
    addresses: List["SupplierAddress"] = Relationship(sa_relationship_kwargs={"lazy": "selectin",
                                                                              "order_by": "SupplierAddress.id"})


class SupplierEmail(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    supplier_id: int = Field(sa_column=Column(ForeignKey("supplier.id", ondelete="CASCADE"), index=True, nullable=False))
    email: str = Field(sa_column=Column(String(320), nullable=False))
    type: ContactType = Field(default=ContactType.PRIMARY, nullable=False)


class SupplierPhone(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    supplier_id: int = Field(sa_column=Column(ForeignKey("supplier.id", ondelete="CASCADE"), index=True, nullable=False))
    phone: str = Field(sa_column=Column(String(32), nullable=False))
    type: ContactType = Field(default=ContactType.PRIMARY, nullable=False)


class SupplierAddress(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    supplier_id: int = Field(sa_column=Column(ForeignKey("supplier.id", ondelete="CASCADE"), index=True, nullable=False))
    title: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    address: str = Field(sa_column=Column(String(512), nullable=False))
    city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    state: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    country: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    zip_code: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))


class Invoice(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = _store_fk()
    invoice_number: str = Field(sa_column=Column(String(64), nullable=False))
    customer_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("customer.id", ondelete="SET NULL"), index=True, nullable=True))
    supplier_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("supplier.id", ondelete="SET NULL"), index=True, nullable=True))
    biller_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    invoice_date: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False))
    due_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    payment_method: Optional[PaymentMethod] = Field(default=None, nullable=True)
    payment_note: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    status: InvoiceStatus = Field(default=InvoiceStatus.PENDING, nullable=False)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    created_by: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    total_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    tax_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    discount_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    paid_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    due_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()

    __table_args__ = (UniqueConstraint("store_id", "invoice_number", name="uq_invoice_store_id_number"),)

    items: List["InvoiceItem"] = Relationship(sa_relationship_kwargs={"lazy": "selectin", "order_by": "InvoiceItem.id"})


class InvoiceItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    invoice_id: int = Field(sa_column=Column(ForeignKey("invoice.id", ondelete="CASCADE"), index=True, nullable=False))
    product_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("product.id", ondelete="SET NULL"), index=True, nullable=True))
    description: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    quantity: int = Field(sa_column=Column(Integer, nullable=False))
    unit_price: float = Field(sa_column=Column(Float, nullable=False))
    tax_rate: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    tax_amount: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    total_price: float = Field(sa_column=Column(Float, nullable=False))


# ----------------------------------------------------------------------------------------------
# kyc

class UserKycProfile(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False))
    status: KycStatus = Field(default=KycStatus.NOT_STARTED, nullable=False)
    middle_name: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    gender: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    date_of_birth: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    means_of_identification: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    identification_number: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    identification_expiry: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    country_of_residency: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    contact_address: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    submitted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class BusinessKyc(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False))
    business_name: str = Field(sa_column=Column(String(255), nullable=False))
    company_type: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    incorporation_number: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    date_of_incorporation: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    country_of_incorporation: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    tax_number: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    company_address: Optional[str] = Field(default=None, sa_column=Column(String(512), nullable=True))
    zip_or_postcode: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    state_or_province: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    business_description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    company_website: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    created_at: datetime = _created_at()
    updated_at: datetime = _updated_at()


class KycDocument(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False))
    type: KycDocumentType = Field(nullable=False)
    url: str = Field(sa_column=Column(String(1024), nullable=False))
    created_at: datetime = _created_at()


class Pep(SQLModel, table=True):
    """Politically exposed person declared by a user."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False))
    name: str = Field(sa_column=Column(String(255), nullable=False))
    position: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    created_at: datetime = _created_at()
