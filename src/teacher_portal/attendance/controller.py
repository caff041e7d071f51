from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, jsonify, request

from ..common.responses import screen_response
from ..container import Container
from ..core.exceptions import RequestFailed, ValidationError
from ..screens.attendance import ClassReportScreen, LowAttendanceScreen, TakeAttendanceScreen
from ..users.controller import login_required


def register(app: Flask, container: Container) -> None:
    def take_screen(course_code: str) -> TakeAttendanceScreen:
        screen = TakeAttendanceScreen(
            g.auth_session, container.course_service, container.attendance_gateway, container.cache
        )
        screen.load()
        screen.select_course(course_code)
        return screen

    def roster_payload(screen: TakeAttendanceScreen) -> dict:
        return {
            "course_code": screen.selected_course_code,
            "students": [asdict(s) for s in screen.visible_students(request.args.get("q", ""))],
            "tally": asdict(screen.tally()),
        }

    @app.route("/api/attendance/<course_code>/roster", endpoint="attendance_roster")
    @login_required(container)
    def attendance_roster(course_code: str):
        screen = take_screen(course_code)
        if screen.data is not None and screen.find(course_code) is None:
            return jsonify({"success": False, "error": f"Unknown course {course_code}"}), 404
        return screen_response(screen, roster_payload(screen), has_data=screen.roll.course_code is not None)

    @app.route("/api/attendance/<course_code>", methods=["POST"], endpoint="attendance_save")
    @login_required(container)
    def attendance_save(course_code: str):
        body = request.get_json(silent=True) or {}
        screen = take_screen(course_code)
        if screen.roll.course_code is None:
            return screen_response(screen, roster_payload(screen), ok=False)

        screen.mark_present_only(body.get("present_ids") or [])
        ok = screen.save()
        payload = roster_payload(screen)
        payload["roll_numbers"] = screen.roll.present_roll_numbers() if ok else []
        return screen_response(screen, payload, ok=ok)

    @app.route("/api/attendance/<course_code>/low", endpoint="attendance_low")
    @login_required(container)
    def attendance_low(course_code: str):
        screen = LowAttendanceScreen(
            g.auth_session,
            container.attendance_service,
            container.cache,
            course_code=course_code,
            start_date=request.args.get("start_date") or None,
            end_date=request.args.get("end_date") or None,
        )
        period = request.args.get("period")
        try:
            if period:
                screen.set_period(period)
            else:
                screen.load()
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        record = screen.data
        payload = {"record": record.to_api() if record else None}
        payload["students"] = [s.to_api() for s in screen.visible(request.args.get("q", ""))]
        return screen_response(screen, payload, has_data=record is not None)

    @app.route("/api/attendance/<course_code>/low/warn", methods=["POST"], endpoint="attendance_warn")
    @login_required(container)
    def attendance_warn(course_code: str):
        body = request.get_json(silent=True) or {}
        screen = LowAttendanceScreen(
            g.auth_session,
            container.attendance_service,
            container.cache,
            course_code=course_code,
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
        )
        screen.load()
        ok = screen.send_warning(str(body.get("roll_no", "")), str(body.get("to", "")))
        return screen_response(screen, {}, ok=ok)

    @app.route("/api/attendance/<course_code>/report", endpoint="attendance_report")
    @login_required(container)
    def attendance_report(course_code: str):
        screen = ClassReportScreen(
            container.attendance_service,
            course_code=course_code,
            start_date=request.args.get("start_date") or None,
            end_date=request.args.get("end_date") or None,
        )
        loaded = screen.load()
        return screen_response(
            screen,
            {
                "class_name": screen.class_name,
                "students": [asdict(s) for s in screen.visible(request.args.get("q", ""))],
            },
            has_data=loaded,
        )

    @app.route("/api/attendance/<course_code>/students", methods=["POST"], endpoint="attendance_add_student")
    @login_required(container)
    def attendance_add_student(course_code: str):
        body = request.get_json(silent=True) or {}
        screen = ClassReportScreen(container.attendance_service, course_code=course_code)
        ok = screen.add_student(str(body.get("name", "")), str(body.get("roll_no", "")))
        return screen_response(screen, {"students": [asdict(s) for s in screen.students]}, ok=ok)

    @app.route("/api/attendance/stats/student/<student_id>", endpoint="attendance_student_stats")
    @login_required(container)
    def attendance_student_stats(student_id: str):
        try:
            stats = container.attendance_service.student_stats(
                student_id,
                start_date=request.args.get("start_date") or None,
                end_date=request.args.get("end_date") or None,
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except RequestFailed:
            return jsonify({"success": False, "error": "Failed to get attendance stats"}), 502
        return jsonify({"success": True, "stats": stats})

    @app.route("/api/attendance/stats/course/<course_code>", endpoint="attendance_class_stats")
    @login_required(container)
    def attendance_class_stats(course_code: str):
        try:
            stats = container.attendance_service.class_stats(
                course_code,
                start_date=request.args.get("start_date") or None,
                end_date=request.args.get("end_date") or None,
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except RequestFailed:
            return jsonify({"success": False, "error": "Failed to get attendance stats"}), 502
        return jsonify({"success": True, "stats": stats})
