"""
Global slowapi rate limiter.

Imported by the users and social_graph routers for per-endpoint limits.
Mounted onto app.state in main.py so slowapi middleware can find it.

Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at Redis
when running more than one worker.
"""
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() in {"1", "true", "yes"},
)
