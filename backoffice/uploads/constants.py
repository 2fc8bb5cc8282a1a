from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.uploads")

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}
ALLOWED_DOCUMENT_TYPES = ALLOWED_IMAGE_TYPES | {"application/pdf"}

# multipart field name -> kyc document type
KYC_UPLOAD_FIELDS = {
    "governmentId": "GOVERNMENT_ID",
    "incorporationCertificate": "INCORPORATION_CERTIFICATE",
    "articleOfAssociation": "ARTICLE_OF_ASSOCIATION",
    "proofOfAddress": "PROOF_OF_ADDRESS",
    "selfieWithId": "SELFIE_WITH_ID",
    "bankStatement": "BANK_STATEMENT",
    "additionalDocuments": "ADDITIONAL",
}
