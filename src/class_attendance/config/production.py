import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

BASE_URL = os.getenv("BASE_URL", "https://attendance.example.edu")

SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", "60"))
LATE_AFTER_MINUTES = int(os.getenv("LATE_AFTER_MINUTES", "15"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
