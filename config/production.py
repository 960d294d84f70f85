import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

GEOLOCATION_TIMEOUT_SECONDS = int(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))
ANNUAL_LEAVE_ALLOWANCE = float(os.getenv("ANNUAL_LEAVE_ALLOWANCE", "24"))

DEFAULT_OFFICE = {
    "latitude": float(os.getenv("OFFICE_LAT", "28.6273928")),
    "longitude": float(os.getenv("OFFICE_LNG", "77.3725545")),
    "radius_m": int(os.getenv("OFFICE_RADIUS_M", "300")),
    "location_name": os.getenv("OFFICE_NAME", "Logix Cyber Park (Default)"),
}
