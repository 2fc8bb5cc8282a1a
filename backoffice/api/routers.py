from fastapi import APIRouter
from backoffice.api import api_prefix
from backoffice.auth.routes import auth_router
from backoffice.brands.routes import brands_router
from backoffice.categories.routes import categories_router
from backoffice.customer_groups.routes import customer_groups_router
from backoffice.customers.routes import customers_router, storefront_customer_router
from backoffice.invoices.routes import invoices_router
from backoffice.kyc.routes import kyc_router
from backoffice.locations.routes import locations_router
from backoffice.product_groups.routes import product_groups_router
from backoffice.products.routes import products_router
from backoffice.stock_adjustments.routes import stock_adjustments_router
from backoffice.stocks.routes import stocks_router
from backoffice.stores.routes import store_router
from backoffice.suppliers.routes import suppliers_router
from backoffice.units.routes import units_router
from backoffice.user.routes import user_router
from backoffice.variants.routes import variants_router
from backoffice.warehouses.routes import warehouses_router


api_routers = APIRouter(prefix=api_prefix)

api_routers.include_router(auth_router, prefix="/auth", tags=["auth"])
api_routers.include_router(user_router, prefix="/user", tags=["user"])
api_routers.include_router(store_router, prefix="/store", tags=["store"])
api_routers.include_router(locations_router, prefix="/locations", tags=["locations"])
api_routers.include_router(kyc_router, prefix="/kyc", tags=["kyc"])

#--------------------------------------------------------------------------------------------------------
# catalog

api_routers.include_router(categories_router, prefix="/categories", tags=["categories"])
api_routers.include_router(products_router, prefix="/products", tags=["products"])
api_routers.include_router(brands_router, prefix="/brands", tags=["brands"])
api_routers.include_router(variants_router, prefix="/product-variants", tags=["product-variants"])
api_routers.include_router(product_groups_router, prefix="/product-groups", tags=["product-groups"])
api_routers.include_router(units_router, prefix="/units", tags=["units"])

#--------------------------------------------------------------------------------------------------------
# operations

api_routers.include_router(warehouses_router, prefix="/warehouses", tags=["warehouses"])
api_routers.include_router(stocks_router, prefix="/stocks", tags=["stocks"])
api_routers.include_router(stock_adjustments_router, prefix="/stock-adjustments", tags=["stock-adjustments"])
api_routers.include_router(suppliers_router, prefix="/suppliers", tags=["suppliers"])
api_routers.include_router(customers_router, prefix="/customers", tags=["customers"])
api_routers.include_router(customer_groups_router, prefix="/customer-groups", tags=["customer-groups"])
api_routers.include_router(invoices_router, prefix="/invoices", tags=["invoices"])

#--------------------------------------------------------------------------------------------------------
# storefront shoppers

api_routers.include_router(storefront_customer_router, prefix="/storefront", tags=["storefront"])
