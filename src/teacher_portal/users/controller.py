from __future__ import annotations

from functools import wraps

from flask import Flask, g, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError, RequestFailed, ValidationError
from ..storage.session_store import FlaskSessionStore
from .service import AuthService


def session_auth(container: Container) -> AuthService:
    """AuthService bound to the current request's Flask session."""
    return AuthService(container.auth_gateway, FlaskSessionStore(container.store))


def login_required(container: Container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            auth_session = session_auth(container).current_session()
            if auth_session is None:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            g.auth_session = auth_session
            return view(*args, **kwargs)

        return wrapper

    return decorator


def _public(auth_session) -> dict:
    data = auth_session.to_dict()
    data.pop("access_token", None)
    data.pop("refresh_token", None)
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True) or {}
        try:
            auth_session = session_auth(container).login(body.get("email", ""), body.get("password", ""))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"success": False, "message": str(e)}), 401
        except RequestFailed as e:
            return jsonify({"success": False, "message": e.message}), 502
        return jsonify({"success": True, "user": _public(auth_session)})

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        body = request.get_json(silent=True) or {}
        try:
            auth_session = session_auth(container).register(
                body.get("email", ""),
                body.get("password", ""),
                body.get("name", ""),
                body.get("role", "teacher"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"success": False, "message": str(e)}), 401
        except RequestFailed as e:
            return jsonify({"success": False, "message": e.message}), 502
        return jsonify({"success": True, "user": _public(auth_session)}), 201

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session_auth(container).logout()
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required(container)
    def me():
        return jsonify({"success": True, "user": _public(g.auth_session)})
