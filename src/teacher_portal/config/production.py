import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

TEACHER_API_URL = os.getenv("TEACHER_API_URL", "")
AUTH_API_URL = os.getenv("AUTH_API_URL", "")
GRIEVANCE_API_URL = os.getenv("GRIEVANCE_API_URL", "")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

CACHE_BACKEND = os.getenv("CACHE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teacher_portal"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
