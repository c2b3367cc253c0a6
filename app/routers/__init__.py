# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - barcode.py: Barcode label generation endpoint
# - health.py: Health check endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import barcode
from . import health

__all__ = [
    "barcode",
    "health",
]
