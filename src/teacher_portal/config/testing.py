SECRET_KEY = "test-secret"

TEACHER_API_URL = "http://teacher.test"
AUTH_API_URL = "http://auth.test"
GRIEVANCE_API_URL = "http://grievance.test"

HTTP_TIMEOUT_SECONDS = 1

CACHE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "teacher_portal_test",
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
