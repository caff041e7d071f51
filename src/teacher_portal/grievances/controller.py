from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, request

from ..common.responses import screen_response
from ..container import Container
from ..screens.grievances import GrievancesScreen
from ..users.controller import login_required


def register(app: Flask, container: Container) -> None:
    def grievances_screen() -> GrievancesScreen:
        return GrievancesScreen(g.auth_session, container.grievance_service, container.cache)

    def feed(screen: GrievancesScreen) -> dict:
        items = screen.visible(request.args.get("q", ""), request.args.get("category") or None)
        return {
            "grievances": [item.to_api() for item in items],
            "stats": asdict(screen.stats) if screen.stats else None,
        }

    @app.route("/api/grievances", endpoint="grievances")
    @login_required(container)
    def grievances():
        screen = grievances_screen()
        screen.load()
        return screen_response(screen, feed(screen), has_data=screen.data is not None)

    @app.route("/api/grievances", methods=["POST"], endpoint="grievance_create")
    @login_required(container)
    def grievance_create():
        body = request.get_json(silent=True) or {}
        screen = grievances_screen()
        ok = screen.create(
            title=str(body.get("title", "")),
            description=str(body.get("description", "")),
            category=str(body.get("category", "")),
        )
        return screen_response(screen, feed(screen), ok=ok)

    @app.route("/api/grievances/<c_id>", methods=["DELETE"], endpoint="grievance_delete")
    @login_required(container)
    def grievance_delete(c_id: str):
        screen = grievances_screen()
        ok = screen.delete(c_id)
        return screen_response(screen, feed(screen), ok=ok)

    @app.route("/api/grievances/<c_id>/<action>", methods=["PUT"], endpoint="grievance_action")
    @login_required(container)
    def grievance_action(c_id: str, action: str):
        screen = grievances_screen()
        handlers = {
            "upvote": screen.upvote,
            "downvote": screen.downvote,
            "resolve": screen.add_resolver,
        }
        handler = handlers.get(action)
        if handler is None:
            return screen_response(screen, {"message": f"Unknown action {action}"}, ok=False)
        ok = handler(c_id)
        return screen_response(screen, feed(screen), ok=ok)

    @app.route("/api/grievances/<c_id>/comments", endpoint="grievance_comments")
    @login_required(container)
    def grievance_comments(c_id: str):
        screen = grievances_screen()
        comments = screen.load_comments(c_id)
        return screen_response(screen, {"comments": [c.to_api() for c in comments]})

    @app.route("/api/grievances/<c_id>/comments", methods=["POST"], endpoint="grievance_comment_post")
    @login_required(container)
    def grievance_comment_post(c_id: str):
        body = request.get_json(silent=True) or {}
        screen = grievances_screen()
        ok = screen.post_comment(c_id, str(body.get("comment", "")))
        return screen_response(screen, {"comments": [c.to_api() for c in screen.comments.get(c_id, [])]}, ok=ok)
