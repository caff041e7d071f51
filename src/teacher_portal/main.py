from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .courses.controller import register as register_courses
from .grievances.controller import register as register_grievances
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(debug=app.config["DEBUG"])
    logger.info(
        "settings=%s teacher_api=%s cache=%s",
        settings_module,
        getattr(settings, "TEACHER_API_URL", ""),
        getattr(settings, "CACHE_BACKEND", "memory"),
    )

    container = container or build_container(settings)

    register_users(app, container)
    register_courses(app, container)
    register_attendance(app, container)
    register_grievances(app, container)

    return app
