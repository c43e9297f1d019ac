from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "hr_records"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from hr_records.database.bootstrap import apply_seed_sql, ensure_admin_user


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config)
    email = getattr(settings, "ADMIN_EMAIL", None)
    password = getattr(settings, "ADMIN_PASSWORD", None)
    if email and password:
        ensure_admin_user(db_config, email=email, password=password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
