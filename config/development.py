import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Browsers give up on a position fix after this long and punch without location
GEOLOCATION_TIMEOUT_SECONDS = int(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))
ANNUAL_LEAVE_ALLOWANCE = float(os.getenv("ANNUAL_LEAVE_ALLOWANCE", "24"))

# Used until an Admin saves the office location
DEFAULT_OFFICE = {
    "latitude": float(os.getenv("OFFICE_LAT", "28.6273928")),
    "longitude": float(os.getenv("OFFICE_LNG", "77.3725545")),
    "radius_m": int(os.getenv("OFFICE_RADIUS_M", "300")),
    "location_name": os.getenv("OFFICE_NAME", "Logix Cyber Park (Default)"),
}
