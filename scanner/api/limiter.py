from slowapi import Limiter
from slowapi.util import get_remote_address

# Per-client request budget shared by all scan routes
limiter = Limiter(key_func=get_remote_address)
