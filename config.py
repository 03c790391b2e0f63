import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-DO-NOT-USE-IN-PRODUCTION')

    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request body

    # Security: Allowed hosts (comma-separated, empty = allow all)
    _allowed_hosts_raw = os.environ.get('ALLOWED_HOSTS', '').strip()
    ALLOWED_HOSTS = [h.strip() for h in _allowed_hosts_raw.split(',') if h.strip()] if _allowed_hosts_raw else []

    # Plagiarism API: optional shared token (empty = open API)
    PLAGIARISM_API_TOKEN = os.environ.get('PLAGIARISM_API_TOKEN', '').strip() or None
    MAX_BATCH_SUBMISSIONS = int(os.environ.get('MAX_BATCH_SUBMISSIONS', 500))

    # Rate limiting (Flask-Limiter)
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '200 per day;50 per hour')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'

    # WebSocket server mode (gevent in production)
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'gevent')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
