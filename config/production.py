import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "classroom_attendance"),
}

CLASS_TIMEZONE = os.getenv("CLASS_TIMEZONE", "America/New_York")
INVITE_TTL_HOURS = float(os.getenv("INVITE_TTL_HOURS", "4"))
CHECKIN_RADIUS_METERS = float(os.getenv("CHECKIN_RADIUS_METERS", "100"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
