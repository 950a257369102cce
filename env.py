import os

# Configure variables obtained from env, including redis address and log output

REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = int(os.environ.get("REDIS_PORT", 6379))
REDIS_DB = int(os.environ.get("REDIS_DB", 0))
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD", "")
# Seconds before a blocked Redis call fails with TimeoutError
REDIS_SOCKET_TIMEOUT = float(os.environ.get("REDIS_SOCKET_TIMEOUT", 5))


LOG_DIR = os.environ.get("LOG_DIR", "log")
LOG_TO_FILE = os.environ.get("LOG_TO_FILE", "True").lower() == "true"


def get_redis_env():
    """
    Get Redis connection environment variable configuration
    """
    return {
        "host": REDIS_HOST,
        "port": REDIS_PORT,
        "db": REDIS_DB,
        "password": REDIS_PASSWORD or None,
        "socket_timeout": REDIS_SOCKET_TIMEOUT,
    }
