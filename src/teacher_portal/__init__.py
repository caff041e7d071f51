"""Teacher portal client.

Organized by feature modules (courses, attendance, grievances, users) with
HTTP gateways to the portal backends, a best-effort response cache, plain
view-state screens and a thin Flask controller layer.
"""
