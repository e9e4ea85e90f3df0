"""JSON envelope codec for confd calls.

- Request: method, positional params and correlation id
- Response: echoed id plus result or error
- ErrorEntry: one item of the daemon's error list
"""

from .request import Request
from .response import ErrorEntry, Response, is_failure_code

__all__ = [
    "Request",
    "Response",
    "ErrorEntry",
    "is_failure_code",
]
