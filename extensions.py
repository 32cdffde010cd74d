"""
Shared Flask extension instances.

Created here so blueprints can import them without importing the app.
"""

from __future__ import annotations

from flask_compress import Compress
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=["600 per hour"])

compress = Compress()
