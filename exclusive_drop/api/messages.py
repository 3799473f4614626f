"""
User-facing messages returned by the API.

The browser client matches on some of these strings, so they live together.
"""

RESERVED = "Secure spot reserved!"
SOLD_OUT = "Campaign Sold Out!"
INVALID_DATA = "Invalid Data"
SERVER_ERROR = "Server Error"
FETCH_ORDERS_FAILED = "Could not fetch orders"
RESET_FAILED = "Could not reset orders"
DATABASE_CLEARED = "Database Cleared"
INVALID_RESET_TOKEN = "Invalid reset token"

BUY_RATE_LIMITED = "Too fast! Slow down."
API_RATE_LIMITED = "Too many requests, please try again later."
