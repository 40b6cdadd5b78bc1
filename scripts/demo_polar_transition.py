"""Demo: print official and civil events around the end of polar night in Longyearbyen."""

from __future__ import annotations

from datetime import datetime, timezone

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from solarclock.contracts import Coordinate  # noqa: E402
from solarclock.orchestrate.batch import calculate_date_range  # noqa: E402


def _hhmm(value: datetime | None) -> str:
    return value.strftime("%m-%d %H:%M") if value else "--"


def main() -> int:
    """Compute a two-week table and print it."""
    coordinate = Coordinate(lat=78.2232, lon=15.6267)
    start = datetime(2025, 2, 8, 12, 0, tzinfo=timezone.utc)
    end = datetime(2025, 2, 22, 12, 0, tzinfo=timezone.utc)

    results = calculate_date_range(coordinate, start, end)

    print("=== Solarclock Polar Transition Demo ===")
    print(f"location: lat={coordinate.lat:.4f}, lon={coordinate.lon:.4f}\n")
    print("date       | civil rise  | sunrise     | sunset      | civil set")
    print("-----------+-------------+-------------+-------------+------------")
    for result in results:
        print(
            f"{result.date.date().isoformat()} | {_hhmm(result.civil_sunrise):<11} | "
            f"{_hhmm(result.sunrise):<11} | {_hhmm(result.sunset):<11} | {_hhmm(result.civil_sunset)}"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
