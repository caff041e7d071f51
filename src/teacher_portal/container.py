from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .api.client import ApiClient
from .attendance.http_attendance_gateway import HttpAttendanceGateway, HttpNotificationGateway
from .attendance.repository import AttendanceGateway, NotificationGateway
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from .courses.http_course_gateway import HttpCourseGateway
from .courses.repository import CourseGateway
from .courses.service import CourseService
from .grievances.http_grievance_gateway import HttpGrievanceGateway
from .grievances.repository import GrievanceGateway
from .grievances.service import GrievanceService
from .storage.cache import ResponseCache
from .storage.memory_store import MemoryKeyValueStore
from .storage.mysql_base import DBConfig, MySQLConnectionFactory, ensure_kv_store
from .storage.mysql_store import MySQLKeyValueStore
from .storage.repository import KeyValueStore
from .users.http_auth_gateway import HttpAuthGateway
from .users.repository import AuthGateway
from .users.service import AuthService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    cache: ResponseCache

    auth_gateway: AuthGateway
    course_gateway: CourseGateway
    attendance_gateway: AttendanceGateway
    notification_gateway: NotificationGateway
    grievance_gateway: GrievanceGateway

    auth_service: AuthService
    course_service: CourseService
    attendance_service: AttendanceService
    grievance_service: GrievanceService


def build_store(settings: Any) -> KeyValueStore:
    backend = str(getattr(settings, "CACHE_BACKEND", "memory")).lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "mysql":
        conn = MySQLConnectionFactory(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if getattr(settings, "AUTO_INIT_DB", False):
            ensure_kv_store(conn)
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown CACHE_BACKEND {backend!r}")


def build_container(
    settings: Any,
    *,
    store: Optional[KeyValueStore] = None,
    http: Optional[requests.Session] = None,
) -> Container:
    timeout = float(getattr(settings, "HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS))
    http = http or requests.Session()

    teacher_client = ApiClient(settings.TEACHER_API_URL, session=http, timeout=timeout)
    auth_client = ApiClient(settings.AUTH_API_URL, session=http, timeout=timeout)
    grievance_client = ApiClient(settings.GRIEVANCE_API_URL, session=http, timeout=timeout)

    store = store if store is not None else build_store(settings)
    cache = ResponseCache(store)

    auth_gateway = HttpAuthGateway(auth_client)
    course_gateway = HttpCourseGateway(teacher_client)
    attendance_gateway = HttpAttendanceGateway(teacher_client)
    notification_gateway = HttpNotificationGateway(auth_client)
    grievance_gateway = HttpGrievanceGateway(grievance_client)

    return Container(
        store=store,
        cache=cache,
        auth_gateway=auth_gateway,
        course_gateway=course_gateway,
        attendance_gateway=attendance_gateway,
        notification_gateway=notification_gateway,
        grievance_gateway=grievance_gateway,
        auth_service=AuthService(auth_gateway, store),
        course_service=CourseService(course_gateway),
        attendance_service=AttendanceService(attendance_gateway, notification_gateway),
        grievance_service=GrievanceService(grievance_gateway),
    )
