"""Using the service layer directly, without Flask.

Controllers are thin; the business rules live in the services wired by the container.
"""

import importlib

from config import get_settings_module

from src.teamtime.teamtime.container import build_container
from src.teamtime.teamtime.geofence.evaluator import evaluate


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    office = container.settings_service.get()
    result = evaluate(office.latitude + 0.001, office.longitude, office.latitude, office.longitude, office.radius_m)
    print(f"{office.location_name}: {result.display_distance_m}m away, in range={result.in_range}")

    print(container.attendance_service.get_history_ui(1, limit=5))


if __name__ == "__main__":
    main()
