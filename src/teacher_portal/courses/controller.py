from __future__ import annotations

from flask import Flask, g, request

from ..common.responses import screen_response
from ..container import Container
from ..screens.courses import CoursesScreen, ManageTAScreen
from ..users.controller import login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses", endpoint="courses")
    @login_required(container)
    def courses():
        screen = CoursesScreen(g.auth_session, container.course_service, container.cache)
        if request.args.get("refresh"):
            screen.refresh()
        else:
            screen.load()
        visible = screen.visible(request.args.get("q", ""))
        return screen_response(
            screen,
            {"courses": [c.to_api() for c in visible]},
            has_data=screen.data is not None,
        )

    @app.route("/api/courses/<course_code>/ta", methods=["POST", "DELETE"], endpoint="course_ta")
    @login_required(container)
    def course_ta(course_code: str):
        body = request.get_json(silent=True) or {}
        screen = ManageTAScreen(g.auth_session, container.course_service, container.cache)
        screen.load()
        if request.method == "POST":
            screen.select(course_code)
            ok = screen.add_ta(body.get("ta_email", ""))
        else:
            ok = screen.remove_ta(course_code, body.get("ta_email", ""))
        return screen_response(screen, {"courses": [c.to_api() for c in screen.data or []]}, ok=ok)
