import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "teacher_portal.config.production"

    if env in {"test", "testing"}:
        return "teacher_portal.config.testing"

    return "teacher_portal.config.development"
