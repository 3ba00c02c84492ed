"""Example: drive the service layer directly (no Flask).

Controllers are thin; the reporting logic lives in the services.
"""

import importlib
import sys

from config import get_settings_module

from src.timebook.timebook.container import build_container
from src.timebook.timebook.management.export import build_overview_csv
from src.timebook.timebook.management.ranges import determine_range


def main():
    period = sys.argv[1] if len(sys.argv) > 1 else "week"

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    range_start, range_end = determine_range(period)
    overview = container.management_service.get_overview(range_start=range_start, range_end=range_end)
    print(f"{overview.range_start} .. {overview.range_end}: {overview.totals}")
    print(build_overview_csv(overview))


if __name__ == "__main__":
    main()
