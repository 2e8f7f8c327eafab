# extensions.py
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Limits and storage come from app.config (RATELIMIT_*) at init_app time
limiter = Limiter(key_func=get_remote_address)
