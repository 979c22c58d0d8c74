"""
Application package.

``core`` holds configuration, logging, errors and the JSON file
store; ``services`` the capsule rules; ``schemas`` the request and
response models; ``api`` the HTTP routes.
"""

from .main import app  # noqa: F401
