from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared by every router so one storage holds all rate-limit counters.
limiter = Limiter(key_func=get_remote_address)
