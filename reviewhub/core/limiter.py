from slowapi import Limiter
from slowapi.util import get_remote_address

from reviewhub.core.config import settings

# Only the model-backed endpoints are decorated; everything else is unlimited.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
