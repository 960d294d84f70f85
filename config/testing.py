import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

GEOLOCATION_TIMEOUT_SECONDS = 10
ANNUAL_LEAVE_ALLOWANCE = 24

DEFAULT_OFFICE = {
    "latitude": 28.6273928,
    "longitude": 77.3725545,
    "radius_m": 300,
    "location_name": "Logix Cyber Park (Default)",
}
