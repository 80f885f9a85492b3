import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

# Prefix of the URL encoded in session QR codes
BASE_URL = os.getenv("BASE_URL", "http://localhost:5000")

SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", "60"))
LATE_AFTER_MINUTES = int(os.getenv("LATE_AFTER_MINUTES", "15"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
