from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.products")

SORT_HIGHEST = "highest"
SORT_LOWEST = "lowest"

# payload key -> child relation, each is replaced wholesale when present
CHILD_RELATIONS = ("pricings", "description_details", "options", "categories",
                   "upsell_product_ids", "cross_sell_product_ids")

EXPORT_FIELDS = (
    "id", "name", "type", "stockQuantity", "unit", "barcode", "customProductUrl", "categories",
    "prices", "hideFromHomepage", "isPreOrder", "createdAt",
)
