"""Core constants used across review ingest modules.

This module centralizes storage contract names and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_TABLE_NAME = "ProductReview"
DEFAULT_UPLOAD_LOG_PATH = "/tmp/s3_upload_log.txt"
DEFAULT_STRUCTURED_EXTENSIONS = (".json",)
DEFAULT_DELIMITED_EXTENSIONS = (".txt",)
CREATED_EVENT_PREFIX = "ObjectCreated"

IDENTIFIER_SCHEME_COUNT = "count"
IDENTIFIER_SCHEME_TOKEN = "token"
SUPPORTED_IDENTIFIER_SCHEMES = (IDENTIFIER_SCHEME_COUNT, IDENTIFIER_SCHEME_TOKEN)

FIELD_PRODUCT_NAME = "ProductName"
FIELD_PRICE = "Price"
FIELD_REVIEW = "Review"
FIELD_RATING = "Rating"
SOURCE_FIELDS = (FIELD_PRODUCT_NAME, FIELD_PRICE, FIELD_REVIEW, FIELD_RATING)

ATTRIBUTE_IDENTIFIER = "Identifier"
ATTRIBUTE_PRODUCT_NAME = "ProductName"
ATTRIBUTE_PRICE = "Price"
ATTRIBUTE_REVIEW_COMMENT = "ReviewComment"
ATTRIBUTE_RATING = "Rating"

# Storable number range: 38 significant digits, magnitude 1e-128 to 9.99e125.
NUMBER_MAX_DIGITS = 38
NUMBER_MAX_EXPONENT = 125
NUMBER_MIN_EXPONENT = -128

RECORD_SEPARATOR = ";"
OTHER_CATEGORY = "other"
