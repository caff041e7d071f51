from __future__ import annotations

import importlib

from dotenv import load_dotenv

from teacher_portal.config import get_settings_module
from teacher_portal.storage.mysql_base import DBConfig, MySQLConnectionFactory, ensure_kv_store


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    ensure_kv_store(MySQLConnectionFactory(config))
    print(f"OK: kv_store ready -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
