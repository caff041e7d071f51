from __future__ import annotations

from typing import Any, Dict

from flask import jsonify


def screen_response(screen, payload: Dict[str, Any], *, ok: bool = True, has_data: bool = True):
    """JSON body for a screen: its payload plus the user-visible error/notice.

    A failed action answers 400; a failed load with nothing to show answers 502.
    """
    state = screen.state
    body = {
        "success": ok and state.error is None,
        "error": state.error,
        "notice": state.notice,
        **payload,
    }
    if not ok:
        return jsonify(body), 400
    if state.error and not has_data:
        return jsonify(body), 502
    return jsonify(body)
