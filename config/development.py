import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "classroom_attendance"),
}

# Time zone used to read check-ins for classes created without one
CLASS_TIMEZONE = os.getenv("CLASS_TIMEZONE", "America/New_York")
INVITE_TTL_HOURS = float(os.getenv("INVITE_TTL_HOURS", "4"))
# 0 disables the distance check
CHECKIN_RADIUS_METERS = float(os.getenv("CHECKIN_RADIUS_METERS", "100"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
