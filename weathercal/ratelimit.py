from slowapi import Limiter
from slowapi.util import get_remote_address

# Per-IP limits; every /widget call may hit the model
limiter = Limiter(key_func=get_remote_address)
