"""baseline schema

Revision ID: 3a1f0c2b9d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f0c2b9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# enum columns store member names
kyc_status = sa.Enum('NOT_STARTED', 'IN_PROGRESS', 'SUBMITTED', 'APPROVED', 'REJECTED', name='kycstatus')
kyc_document_type = sa.Enum('GOVERNMENT_ID', 'INCORPORATION_CERTIFICATE', 'ARTICLE_OF_ASSOCIATION',
                            'PROOF_OF_ADDRESS', 'SELFIE_WITH_ID', 'BANK_STATEMENT', 'ADDITIONAL',
                            name='kycdocumenttype')
product_type = sa.Enum('REGULAR', 'VARIANT', name='producttype')
contact_type = sa.Enum('PRIMARY', 'SECONDARY', 'WORK', 'PERSONAL', 'OTHER', name='contacttype')
invoice_status = sa.Enum('DRAFT', 'PENDING', 'PARTIALLY_PAID', 'PAID', 'OVERDUE', 'CANCELLED', name='invoicestatus')
payment_method = sa.Enum('CASH', 'BANK_TRANSFER', 'CARD', 'MOBILE_MONEY', 'OTHER', name='paymentmethod')
adjustment_type = sa.Enum('INCREASE', 'DECREASE', name='adjustmenttype')
unit_status = sa.Enum('ACTIVE', 'INACTIVE', name='unitstatus')

ENUMS = (kyc_status, kyc_document_type, product_type, contact_type, invoice_status, payment_method,
         adjustment_type, unit_status)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _store_id():
    return sa.Column('store_id', sa.Integer(), sa.ForeignKey('store.id', ondelete='CASCADE'), nullable=False)


def _parent_id(name: str, table: str):
    return sa.Column(name, sa.Integer(), sa.ForeignKey(f'{table}.id', ondelete='CASCADE'), nullable=False)


def _index(table: str, *columns: str, unique: bool = False):
    op.create_index(op.f(f"ix_{table}_{'_'.join(columns)}"), table, list(columns), unique=unique)


def upgrade() -> None:
    """Upgrade schema."""
    # identity
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=True),
        sa.Column('first_name', sa.String(length=128), nullable=False),
        sa.Column('last_name', sa.String(length=128), nullable=False),
        sa.Column('full_name', sa.String(length=256), nullable=True),
        sa.Column('username', sa.String(length=64), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('how_did_you_find_us', sa.String(length=255), nullable=True),
        sa.Column('profile_photo_url', sa.String(length=1024), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('verification_code', sa.String(length=16), nullable=True),
        sa.Column('verification_code_expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_password_token', sa.String(length=16), nullable=True),
        sa.Column('reset_password_expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('last_active', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    _index('users', 'email', unique=True)

    op.create_table(
        'store',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('business_name', sa.String(length=255), nullable=False),
        sa.Column('store_url', sa.String(length=63), nullable=False),
        sa.Column('country', sa.String(length=128), nullable=False),
        sa.Column('currency', sa.String(length=8), nullable=False),
        sa.Column('logo_url', sa.String(length=1024), nullable=True),
        sa.Column('contact_email', sa.String(length=320), nullable=True),
        sa.Column('contact_phone', sa.String(length=32), nullable=True),
        sa.Column('is_launched', sa.Boolean(), nullable=False),
        sa.Column('launched_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    _index('store', 'store_url', unique=True)

    op.create_table(
        'customergroup',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('customergroup', 'store_id')

    op.create_table(
        'customer',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('password_hash', sa.Text(), nullable=True),
        sa.Column('first_name', sa.String(length=128), nullable=False),
        sa.Column('last_name', sa.String(length=128), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('instagram_handle', sa.String(length=128), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('shipping_address', sa.String(length=512), nullable=True),
        sa.Column('shipping_city', sa.String(length=128), nullable=True),
        sa.Column('shipping_state', sa.String(length=128), nullable=True),
        sa.Column('shipping_country', sa.String(length=128), nullable=True),
        sa.Column('shipping_zip_code', sa.String(length=32), nullable=True),
        sa.Column('billing_address', sa.String(length=512), nullable=True),
        sa.Column('billing_city', sa.String(length=128), nullable=True),
        sa.Column('billing_state', sa.String(length=128), nullable=True),
        sa.Column('billing_country', sa.String(length=128), nullable=True),
        sa.Column('billing_zip_code', sa.String(length=32), nullable=True),
        sa.Column('same_as_shipping_address', sa.Boolean(), nullable=False),
        sa.Column('subscribed_to_newsletter', sa.Boolean(), nullable=False),
        sa.Column('customer_group_id', sa.Integer(), sa.ForeignKey('customergroup.id', ondelete='SET NULL'),
                  nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('verification_code', sa.String(length=16), nullable=True),
        sa.Column('verification_code_expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_password_token', sa.String(length=16), nullable=True),
        sa.Column('reset_password_expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('last_active', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id', 'email', name='uq_customer_store_id_email'),
    )
    _index('customer', 'store_id')
    _index('customer', 'customer_group_id')

    # store configuration
    op.create_table(
        'shippingconfig',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), sa.ForeignKey('store.id', ondelete='CASCADE'), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        sa.Column('flat_rate', sa.Float(), nullable=True),
        sa.Column('free_shipping_threshold', sa.Float(), nullable=True),
        sa.Column('processing_days', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id'),
    )

    op.create_table(
        'shippingmethod',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('estimated_delivery', sa.String(length=128), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('shippingmethod', 'store_id')

    op.create_table(
        'storesettings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), sa.ForeignKey('store.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tagline', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('support_email', sa.String(length=320), nullable=True),
        sa.Column('support_phone', sa.String(length=32), nullable=True),
        sa.Column('primary_color', sa.String(length=16), nullable=True),
        sa.Column('show_out_of_stock', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id'),
    )

    op.create_table(
        'location',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('location_name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=512), nullable=False),
        sa.Column('city', sa.String(length=128), nullable=True),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('country', sa.String(length=128), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('location', 'store_id')

    # catalog
    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('category', 'store_id')

    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('product_images', sa.JSON(), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('long_description', sa.Text(), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=False),
        sa.Column('type', product_type, nullable=False),
        sa.Column('custom_product_url', sa.String(length=255), nullable=True),
        sa.Column('seo_description', sa.Text(), nullable=True),
        sa.Column('checkout_button_cta', sa.String(length=128), nullable=True),
        sa.Column('hide_from_homepage', sa.Boolean(), nullable=False),
        sa.Column('unit', sa.String(length=64), nullable=True),
        sa.Column('barcode', sa.String(length=128), nullable=True),
        sa.Column('min_order_quantity', sa.Integer(), nullable=True),
        sa.Column('max_order_quantity', sa.Integer(), nullable=True),
        sa.Column('is_pre_order', sa.Boolean(), nullable=False),
        sa.Column('pre_order_release_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('show_striked_out_original_price', sa.Boolean(), nullable=False),
        sa.Column('embed_video_path', sa.String(length=1024), nullable=True),
        sa.Column('discovery_categories', sa.JSON(), nullable=False),
        sa.Column('commission_percentage', sa.Float(), nullable=True),
        sa.Column('auto_redirect_after_purchase', sa.Boolean(), nullable=False),
        sa.Column('redirect_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('product', 'store_id')
    _index('product', 'custom_product_url')

    op.create_table(
        'productcategory',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        _parent_id('category_id', 'category'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'category_id', name='uq_product_category_product_id_category_id'),
    )
    _index('productcategory', 'product_id')
    _index('productcategory', 'category_id')

    op.create_table(
        'productpricing',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        sa.Column('currency_code', sa.String(length=8), nullable=False),
        sa.Column('selling_price', sa.Float(), nullable=False),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'currency_code', name='uq_product_pricing_product_id_currency'),
    )
    _index('productpricing', 'product_id')

    op.create_table(
        'productdescriptiondetail',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('productdescriptiondetail', 'product_id')

    op.create_table(
        'productoption',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        sa.Column('option_type', sa.String(length=128), nullable=False),
        sa.Column('values', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('productoption', 'product_id')

    op.create_table(
        'productupsell',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        _parent_id('upsell_product_id', 'product'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'upsell_product_id', name='uq_product_upsell_pair'),
    )
    _index('productupsell', 'product_id')
    _index('productupsell', 'upsell_product_id')

    op.create_table(
        'productcrosssell',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('product_id', 'product'),
        _parent_id('cross_sell_product_id', 'product'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'cross_sell_product_id', name='uq_product_cross_sell_pair'),
    )
    _index('productcrosssell', 'product_id')
    _index('productcrosssell', 'cross_sell_product_id')

    op.create_table(
        'brand',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('brand', 'store_id')

    op.create_table(
        'productvariant',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('has_multiple_options', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('productvariant', 'store_id')

    op.create_table(
        'productvariantoption',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('variant_id', 'productvariant'),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('productvariantoption', 'variant_id')

    op.create_table(
        'productgroup',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('productgroup', 'store_id')

    op.create_table(
        'unit',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('status', unit_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('unit', 'store_id')

    # inventory
    op.create_table(
        'warehouse',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=512), nullable=True),
        sa.Column('city', sa.String(length=128), nullable=True),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('country', sa.String(length=128), nullable=True),
        sa.Column('zip_code', sa.String(length=32), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('warehouse', 'store_id')

    op.create_table(
        'stock',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        _parent_id('product_id', 'product'),
        _parent_id('warehouse_id', 'warehouse'),
        sa.Column('quantity', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'warehouse_id', name='uq_stock_product_id_warehouse_id'),
    )
    _index('stock', 'store_id')
    _index('stock', 'product_id')
    _index('stock', 'warehouse_id')

    op.create_table(
        'stockadjustment',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        _parent_id('warehouse_id', 'warehouse'),
        _parent_id('product_id', 'product'),
        sa.Column('reference_no', sa.String(length=64), nullable=True),
        sa.Column('adjustment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('applied_change', sa.Integer(), nullable=False),
        sa.Column('type', adjustment_type, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('stockadjustment', 'store_id')
    _index('stockadjustment', 'warehouse_id')
    _index('stockadjustment', 'product_id')

    # suppliers & invoices
    op.create_table(
        'supplier',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('supplier_code', sa.String(length=64), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('supplier', 'store_id')

    op.create_table(
        'supplieremail',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('supplier_id', 'supplier'),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('type', contact_type, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('supplieremail', 'supplier_id')

    op.create_table(
        'supplierphone',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('supplier_id', 'supplier'),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('type', contact_type, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('supplierphone', 'supplier_id')

    op.create_table(
        'supplieraddress',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('supplier_id', 'supplier'),
        sa.Column('title', sa.String(length=128), nullable=True),
        sa.Column('address', sa.String(length=512), nullable=False),
        sa.Column('city', sa.String(length=128), nullable=True),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('country', sa.String(length=128), nullable=True),
        sa.Column('zip_code', sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('supplieraddress', 'supplier_id')

    op.create_table(
        'invoice',
        sa.Column('id', sa.Integer(), nullable=False),
        _store_id(),
        sa.Column('invoice_number', sa.String(length=64), nullable=False),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customer.id', ondelete='SET NULL'), nullable=True),
        sa.Column('supplier_id', sa.Integer(), sa.ForeignKey('supplier.id', ondelete='SET NULL'), nullable=True),
        sa.Column('biller_name', sa.String(length=255), nullable=True),
        sa.Column('invoice_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_method', payment_method, nullable=True),
        sa.Column('payment_note', sa.Text(), nullable=True),
        sa.Column('status', invoice_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=255), nullable=True),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('tax_amount', sa.Float(), nullable=False),
        sa.Column('discount_amount', sa.Float(), nullable=False),
        sa.Column('paid_amount', sa.Float(), nullable=False),
        sa.Column('due_amount', sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id', 'invoice_number', name='uq_invoice_store_id_number'),
    )
    _index('invoice', 'store_id')
    _index('invoice', 'customer_id')
    _index('invoice', 'supplier_id')

    op.create_table(
        'invoiceitem',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('invoice_id', 'invoice'),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id', ondelete='SET NULL'), nullable=True),
        sa.Column('description', sa.String(length=512), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('tax_rate', sa.Float(), nullable=False),
        sa.Column('tax_amount', sa.Float(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('invoiceitem', 'invoice_id')
    _index('invoiceitem', 'product_id')

    # kyc
    op.create_table(
        'userkycprofile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', kyc_status, nullable=False),
        sa.Column('middle_name', sa.String(length=128), nullable=True),
        sa.Column('gender', sa.String(length=32), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('means_of_identification', sa.String(length=64), nullable=True),
        sa.Column('identification_number', sa.String(length=128), nullable=True),
        sa.Column('identification_expiry', sa.Date(), nullable=True),
        sa.Column('country_of_residency', sa.String(length=128), nullable=True),
        sa.Column('contact_address', sa.String(length=512), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'businesskyc',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('business_name', sa.String(length=255), nullable=False),
        sa.Column('company_type', sa.String(length=128), nullable=True),
        sa.Column('incorporation_number', sa.String(length=128), nullable=True),
        sa.Column('date_of_incorporation', sa.Date(), nullable=True),
        sa.Column('country_of_incorporation', sa.String(length=128), nullable=True),
        sa.Column('tax_number', sa.String(length=128), nullable=True),
        sa.Column('company_address', sa.String(length=512), nullable=True),
        sa.Column('zip_or_postcode', sa.String(length=32), nullable=True),
        sa.Column('state_or_province', sa.String(length=128), nullable=True),
        sa.Column('city', sa.String(length=128), nullable=True),
        sa.Column('business_description', sa.Text(), nullable=True),
        sa.Column('company_website', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'kycdocument',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('user_id', 'users'),
        sa.Column('type', kyc_document_type, nullable=False),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('kycdocument', 'user_id')

    op.create_table(
        'pep',
        sa.Column('id', sa.Integer(), nullable=False),
        _parent_id('user_id', 'users'),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('position', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('pep', 'user_id')


def downgrade() -> None:
    """Downgrade schema."""
    # children before parents; dropping a table drops its indexes
    for table in ('pep', 'kycdocument', 'businesskyc', 'userkycprofile',
                  'invoiceitem', 'invoice', 'supplieraddress', 'supplierphone', 'supplieremail', 'supplier',
                  'stockadjustment', 'stock', 'warehouse',
                  'unit', 'productgroup', 'productvariantoption', 'productvariant', 'brand',
                  'productcrosssell', 'productupsell', 'productoption', 'productdescriptiondetail',
                  'productpricing', 'productcategory', 'product', 'category',
                  'location', 'storesettings', 'shippingmethod', 'shippingconfig',
                  'customer', 'customergroup', 'store', 'users'):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.drop(bind, checkfirst=True)
