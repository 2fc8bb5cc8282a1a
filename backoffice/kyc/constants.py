from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.kyc")

# personal fields that must be present before the profile can be submitted
SUBMIT_REQUIRED_FIELDS = ("country_of_residency", "contact_address")

PERSONAL_FIELDS = (
    "middle_name", "gender", "date_of_birth", "means_of_identification", "identification_number",
    "identification_expiry", "country_of_residency", "contact_address",
)
