"""Constants shared by the summary card components."""

RATINGS_ENDPOINT = "/api/ratings/parking/{space_id}"
UPLOADS_PATH = "/uploads"

CLOUDINARY_IMAGE_URL = "https://res.cloudinary.com/{cloud_name}/image/upload/{path}"

DEFAULT_PLACEHOLDER_URL = (
    "https://images.unsplash.com/photo-1560518883-ce09059eeffa"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&q=80"
)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyparkingcard",
}

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CURRENCY_SYMBOL = "₹"

LOGIN_PATH = "/login"
BOOKING_PATH = "/vehicle-details"

DEFAULT_TITLE = "Premium Parking Space"
DEFAULT_STREET = "Unknown Street"
ANONYMOUS_AUTHOR = "Anonymous"
NO_COMMENT = "No comment provided."
UNKNOWN_DATE = "Date unknown"

LOGIN_REQUIRED_MESSAGE = "Please log in to book the parking space."
IDENTITY_UNVERIFIED_MESSAGE = "Your account is not verified. Please complete your KYC to book."
PHONE_UNVERIFIED_MESSAGE = "Please verify your phone number to book."

ENV_API_BASE = "PARKINGCARD_API_BASE"
ENV_CLOUD_NAME = "PARKINGCARD_CLOUD_NAME"
ENV_PLACEHOLDER_URL = "PARKINGCARD_PLACEHOLDER_URL"
ENV_TIMEOUT = "PARKINGCARD_TIMEOUT"
ENV_RETRY_COUNT = "PARKINGCARD_RETRY_COUNT"
