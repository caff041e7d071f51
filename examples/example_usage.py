"""Example: take attendance through the service layer (no Flask).

Screens are plain objects; pass them the signed-in session explicitly.
"""

import importlib

from teacher_portal.config import get_settings_module
from teacher_portal.container import build_container
from teacher_portal.screens.attendance import TakeAttendanceScreen


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    session = container.auth_service.login("teacher@example.edu", "secret")
    screen = TakeAttendanceScreen(session, container.course_service, container.attendance_gateway, container.cache)
    screen.load()
    if not screen.data:
        print(screen.state.error or "No courses")
        return

    screen.select_course(screen.data[0].course_code)
    print(screen.tally())
    screen.save()
    print(screen.state.notice or screen.state.error)


if __name__ == "__main__":
    main()
