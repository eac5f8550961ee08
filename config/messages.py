# config/messages.py
"""
Customer-facing copy and business contact details
"""

SITE_NAME = 'Bryan Fire Safety'
SITE_DOMAIN = 'bryanfire.com'

BUSINESS_PHONE = '408-293-1077'
BUSINESS_EMAIL = 'info@bryanfire.com'

VALIDATION_FAILED_MESSAGE = (
    f"Please complete all required fields. "
    f"Call us at {BUSINESS_PHONE} for immediate assistance."
)

DELIVERY_FAILED_MESSAGE = (
    f"Unable to send your message at this time. "
    f"Please call {BUSINESS_PHONE} or email {BUSINESS_EMAIL} directly."
)

THANK_YOU_MESSAGE = "Thank you {name}! We received your request and will respond shortly."

# Outbound email
EMAIL_SUBJECT = "Service Request from {name}"
EMAIL_BANNER = "=== NEW SERVICE REQUEST ==="
EMAIL_DELIMITER = "-" * 50
EMAIL_FOOTER = f"Submitted via {SITE_DOMAIN} contact form"
