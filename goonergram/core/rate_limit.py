"""
Shared rate limiter.

Routers decorate write-heavy endpoints with `@limiter.limit(...)`; the app
registers the same instance on `app.state.limiter`.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
