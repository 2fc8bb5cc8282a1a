USER_SCOPE = "user"
CUSTOMER_SCOPE = "customer"
