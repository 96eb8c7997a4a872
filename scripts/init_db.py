from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timeclock.config import get_settings_module
from timeclock.database.bootstrap import apply_schema, ensure_admin_user, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    if settings.BOOTSTRAP_ADMIN_EMAIL:
        ensure_admin_user(db_config, user_id=settings.BOOTSTRAP_ADMIN_EMAIL, full_name=settings.BOOTSTRAP_ADMIN_NAME)

    tables = list_tables(db_config)
    print(
        "OK: Applied schema -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
