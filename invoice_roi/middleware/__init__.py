"""Middleware package."""
from invoice_roi.middleware.rate_limit import limiter, report_rate_limit, setup_rate_limiting

__all__ = ["limiter", "report_rate_limit", "setup_rate_limiting"]
