import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

TEACHER_API_URL = os.getenv("TEACHER_API_URL", "http://localhost:8000")
AUTH_API_URL = os.getenv("AUTH_API_URL", "http://localhost:8001")
GRIEVANCE_API_URL = os.getenv("GRIEVANCE_API_URL", "http://localhost:8002")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

# "memory" keeps cached responses per process, "mysql" shares them in kv_store
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teacher_portal"),
}

DEBUG = True

# Create the kv_store table on startup when CACHE_BACKEND is "mysql"
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
