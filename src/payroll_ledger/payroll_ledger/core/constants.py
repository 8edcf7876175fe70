"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_CURRENCY = "USD"
SUPPORTED_CURRENCIES = ("USD",)
DEFAULT_RECENT_PAYMENTS = 6
DEFAULT_AUDIT_LIMIT = 200
MAX_AUDIT_LIMIT = 1000
MIN_PASSWORD_LENGTH = 6
SYSTEM_ACTOR = "System"

# Column widths of database/schema.sql
MAX_PAYMENT_AMOUNT = "9999999999.99"  # DECIMAL(12, 2)
MAX_NAME_LENGTH = 150
MAX_REFERENCE_LENGTH = 100
MAX_TEXT_LENGTH = 255
MAX_NOTES_LENGTH = 10000  # TEXT
