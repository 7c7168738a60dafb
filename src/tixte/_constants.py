"""Constants shared across tixte modules."""

from typing import Final

BASE_URL: Final = "https://api.tixte.com/v1"
GITHUB_URL: Final = "https://github.com/BlockyDotJar/Tixte-Java-Library"
USER_AGENT: Final = f"Tixte4Py-Request ({GITHUB_URL}, v1.0.0)"

DEFAULT_TIMEOUT: Final = 30.0
DEFAULT_RATE_LIMIT_RETRY_DELAY: Final = 1.0

# Placeholder names whose values group requests into rate-limit buckets
MAJOR_PARAMETER_NAMES: Final = ("user_data", "asset_id", "domain")
MAX_MAJOR_PARAMETER_LENGTH: Final = 30
NO_MAJOR_PARAMETERS: Final = "N/A"

PRETTY_INDENT: Final = 4

MIN_INT: Final = -(2**31)
MAX_INT: Final = 2**31 - 1
MAX_UNSIGNED_INT: Final = 2**32 - 1
MIN_LONG: Final = -(2**63)
MAX_LONG: Final = 2**63 - 1
MAX_UNSIGNED_LONG: Final = 2**64 - 1

UPLOAD_TYPE_PUBLIC: Final = 1
UPLOAD_TYPE_PRIVATE: Final = 2
PREMIUM_TIER_TURBO: Final = 1
PREMIUM_TIER_TURBO_CHARGED: Final = 2

TITLE_MAX_LENGTH: Final = 256
AUTHOR_MAX_LENGTH: Final = 256
PROVIDER_MAX_LENGTH: Final = 256
DESCRIPTION_MAX_LENGTH: Final = 4096
URL_MAX_LENGTH: Final = 2000
EMBED_MAX_LENGTH_BOT: Final = 6000
EMBED_MAX_LENGTH_CLIENT: Final = 2000
DEFAULT_EMBED_COLOR: Final = "#ffffff"
