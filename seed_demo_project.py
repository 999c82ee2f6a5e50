"""
Seed one project per tier for the demo account and write their .ics files.
Run:  python seed_demo_project.py [YYYY-MM-DD]
"""
import sys
from datetime import date

from smm_planner.config import get_settings
from smm_planner.infrastructure.db.session import get_session_factory
from smm_planner.application.users import EnsureDemoUserUseCase
from smm_planner.application.projects import CreateProjectUseCase
from smm_planner.application.calendar_export import ExportProjectCalendarUseCase
from smm_planner.domain.tiers import TIER_DEFINITIONS

start = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()

db = get_session_factory()()
try:
    user = EnsureDemoUserUseCase(db).execute(get_settings().DEMO_USERNAME)

    for tier, info in TIER_DEFINITIONS.items():
        name = f"Demo {info['name']} {start:%Y-%m}"
        project, count = CreateProjectUseCase(db).execute(
            user_id=user.id, name=name, tier=tier, start_date=start,
        )
        filename, ics_text = ExportProjectCalendarUseCase(db).execute(project.id)
        with open(filename, "w", encoding="utf-8", newline="") as f:
            f.write(ics_text)
        print(f"  {name}: {count} tasks -> {filename}")
finally:
    db.close()
