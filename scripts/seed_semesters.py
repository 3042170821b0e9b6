#!/usr/bin/env python3
"""
Seed eight semesters of GPA history and a goal plan into the Grecko API.

Plan:
  - 40 subjects offered in total, 5 per semester
  - semester GPAs climb from 2.9 toward 3.6 with a dip in year 3
  - target GPA 3.5

Usage examples:
  - Against a local backend:
      python scripts/seed_semesters.py --base-url http://localhost:8000 --user demo-student
  - Stop after the first N semesters (simulates a student mid-degree):
      python scripts/seed_semesters.py --base-url http://localhost:8000 --user demo --semesters 5
"""

from __future__ import annotations

import argparse
import sys
from typing import List

try:
    import requests  # type: ignore
except Exception as exc:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


SEMESTER_GPAS = [2.9, 3.1, 3.2, 3.4, 3.0, 3.3, 3.5, 3.6]
SUBJECTS_PER_SEMESTER = 5
TARGET_GPA = 3.5


def semester_names(count: int) -> List[str]:
    """'Year 1 Fall', 'Year 1 Spring', 'Year 2 Fall', ..."""
    names = []
    for i in range(count):
        year = i // 2 + 1
        term = "Fall" if i % 2 == 0 else "Spring"
        names.append(f"Year {year} {term}")
    return names


def running_gpa(gpas: List[float]) -> float:
    # Equal subject counts per semester, so the plain mean is exact
    return round(sum(gpas) / len(gpas) + 1e-9, 2)


def call(session: requests.Session, method: str, base_url: str, path: str, payload: dict | None = None) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = session.request(method, url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{method} {path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed semester GPA history and goals")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--user", required=True, help="User id sent as X-User-Id")
    ap.add_argument("--semesters", type=int, default=len(SEMESTER_GPAS), help="How many semesters to record")
    args = ap.parse_args()

    count = max(1, min(args.semesters, len(SEMESTER_GPAS)))
    http = requests.Session()
    http.headers["X-User-Id"] = args.user

    call(http, "POST", args.base_url, "session")

    done: List[float] = []
    for name, gpa in zip(semester_names(count), SEMESTER_GPAS[:count]):
        done.append(gpa)
        call(http, "POST", args.base_url, "gpa/history", {"label": name, "gpa": running_gpa(done)})

    goals = call(
        http,
        "PATCH",
        args.base_url,
        "goals",
        {
            "current_gpa": running_gpa(done),
            "target_gpa": TARGET_GPA,
            "courses_taken": count * SUBJECTS_PER_SEMESTER,
            "total_courses": len(SEMESTER_GPAS) * SUBJECTS_PER_SEMESTER,
        },
    )

    print(f"Seed complete: {count} semesters recorded, required average {goals['required_gpa']}.")


if __name__ == "__main__":
    main()
