"""Rate limiting middleware using slowapi."""
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from invoice_roi.config import settings


# IP-keyed limiter, in-memory storage; applies RATE_LIMIT_DEFAULT to every route
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=None,
)

# Email capture is the abuse-prone path, so report generation gets its own budget.
# Read per request so the limit follows the current settings.
report_rate_limit = limiter.limit(lambda: settings.RATE_LIMIT_REPORTS)


def setup_rate_limiting(app):
    """Configure rate limiting for the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
