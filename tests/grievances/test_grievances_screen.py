from __future__ import annotations

import pytest

from teacher_portal.core.constants import GRIEVANCES_STORAGE_KEY
from teacher_portal.core.enums import GrievanceStatus
from teacher_portal.core.exceptions import MalformedResponse, RequestFailed
from teacher_portal.grievances.http_grievance_gateway import HttpGrievanceGateway
from teacher_portal.grievances.model import Comment, Grievance, GrievanceStats
from teacher_portal.grievances.service import GrievanceService
from teacher_portal.screens.grievances import GrievancesScreen
from teacher_portal.storage.cache import ResponseCache
from teacher_portal.storage.keys import comments_cache_key
from teacher_portal.storage.memory_store import MemoryKeyValueStore
from teacher_portal.users.model import AuthSession

SESSION = AuthSession(access_token="a", refresh_token="r", user_id="u1", email="teacher@x.edu", name="Prof T")
HOUR = 3600


class Clock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def grievance(c_id, title, category="hostel"):
    return Grievance(c_id=c_id, user_id="s1", title=title, description=f"{title} details", category=category)


class FakeGrievanceGateway:
    def __init__(self):
        self.items = [grievance("1", "Leaky tap"), grievance("2", "Wifi down", "network")]
        self.comments = {"1": [Comment("c1", "u2", "first"), Comment("c2", "u3", "second")]}
        self.fail = False
        self.created = []
        self.votes = []

    def list_grievances(self):
        if self.fail:
            raise RequestFailed("offline")
        return list(self.items)

    def get_comments(self, c_id):
        if self.fail:
            raise RequestFailed("offline")
        return list(self.comments.get(c_id, []))

    def get_stats(self):
        return GrievanceStats(total_complaints=2, resolved_complaints=0, unresolved_complaints=2)

    def create_grievance(self, *, user_id, title, description, category):
        self.created.append((user_id, title, description, category))
        self.items.append(grievance(str(len(self.items) + 1), title, category))
        return {"message": "created"}

    def delete_grievance(self, c_id):
        self.items = [g for g in self.items if g.c_id != c_id]
        return {}

    def upvote(self, c_id, user_id):
        self.votes.append(("up", c_id, user_id))
        return {}

    def downvote(self, c_id, user_id):
        self.votes.append(("down", c_id, user_id))
        return {}

    def add_resolver(self, c_id, user_id):
        self.votes.append(("resolve", c_id, user_id))
        return {}

    def post_comment(self, c_id, *, user_id, message):
        self.comments.setdefault(c_id, []).append(Comment("c9", user_id, message))
        return {}


def make_screen(gateway=None, store=None, clock=None):
    gateway = gateway or FakeGrievanceGateway()
    cache = ResponseCache(store if store is not None else MemoryKeyValueStore(), clock=clock or Clock())
    return GrievancesScreen(SESSION, GrievanceService(gateway), cache), gateway, cache


def test_load_lists_newest_first_and_loads_stats():
    screen, _, _ = make_screen()

    screen.load()

    assert [g.c_id for g in screen.data] == ["2", "1"]
    assert screen.stats.unresolved_complaints == 2
    assert screen.state.loading is False


def test_cached_feed_is_used_within_two_hours():
    store, clock = MemoryKeyValueStore(), Clock()
    first, _, _ = make_screen(store=store, clock=clock)
    first.load()

    clock.now += 1.5 * HOUR
    gateway = FakeGrievanceGateway()
    gateway.fail = True
    second, _, _ = make_screen(gateway, store=store, clock=clock)
    second.load()

    assert [g.c_id for g in second.data] == ["2", "1"]
    assert second.state.error == "Can not fetch grievances at the moment"


def test_expired_feed_is_dropped():
    store, clock = MemoryKeyValueStore(), Clock()
    first, _, _ = make_screen(store=store, clock=clock)
    first.load()

    clock.now += 3 * HOUR
    second, _, _ = make_screen(store=store, clock=clock)

    assert second.load_cached() is False
    assert store.get(GRIEVANCES_STORAGE_KEY) is None


def test_visible_filters_by_text_and_category():
    screen, _, _ = make_screen()
    screen.load()

    assert [g.c_id for g in screen.visible("wifi")] == ["2"]
    assert [g.c_id for g in screen.visible("", "HOSTEL")] == ["1"]
    assert screen.visible("tap", "network") == []


def test_comments_are_newest_first_and_cached():
    screen, _, cache = make_screen()

    comments = screen.load_comments("1")

    assert [c.comment_id for c in comments] == ["c2", "c1"]
    assert screen.comments["1"] == comments
    assert cache.read_fresh(comments_cache_key("1"), max_age_seconds=HOUR)[0]["comment_id"] == "c2"


def test_comments_fall_back_to_fresh_cache_when_offline():
    store, clock = MemoryKeyValueStore(), Clock()
    online, _, _ = make_screen(store=store, clock=clock)
    online.load_comments("1")

    gateway = FakeGrievanceGateway()
    gateway.fail = True
    offline, _, _ = make_screen(gateway, store=store, clock=clock)

    clock.now += 0.5 * HOUR
    assert [c.comment_id for c in offline.load_comments("1")] == ["c2", "c1"]

    clock.now += HOUR
    assert offline.load_comments("1") == []


def test_load_purges_comment_caches_older_than_two_hours():
    store, clock = MemoryKeyValueStore(), Clock()
    screen, _, _ = make_screen(store=store, clock=clock)
    screen.load_comments("1")
    clock.now += 3 * HOUR
    screen.load_comments("2")

    screen.load()

    assert store.get(comments_cache_key("1")) is None
    assert store.get(comments_cache_key("2")) is not None


def test_create_refetches_feed():
    screen, gateway, _ = make_screen()
    screen.load()

    assert screen.create(title="Broken fan", description="Room 4", category="hostel") is True

    assert gateway.created == [("u1", "Broken fan", "Room 4", "hostel")]
    assert screen.data[0].title == "Broken fan"
    assert screen.state.notice == "Grievance submitted"


def test_create_requires_title():
    screen, gateway, _ = make_screen()

    assert screen.create(title=" ", description="Room 4", category="hostel") is False
    assert screen.state.error == "Title is required"
    assert gateway.created == []


def test_votes_and_resolver_use_session_user():
    screen, gateway, _ = make_screen()

    screen.upvote("1")
    screen.downvote("2")
    screen.add_resolver("1")

    assert gateway.votes == [("up", "1", "u1"), ("down", "2", "u1"), ("resolve", "1", "u1")]


def test_post_comment_reloads_comments():
    screen, _, _ = make_screen()

    assert screen.post_comment("1", "me too") is True

    assert screen.comments["1"][0].c_message == "me too"


def test_delete_removes_from_feed():
    screen, _, _ = make_screen()
    screen.load()

    assert screen.delete("1") is True
    assert [g.c_id for g in screen.data] == ["2"]


def test_from_api_counts_upvote_lists_and_tolerates_unknown_status():
    g = Grievance.from_api({"c_id": 5, "upvotes": ["a", "b"], "status": "weird", "complaint_title": "T"})

    assert g.upvotes == 2
    assert g.status is GrievanceStatus.PENDING
    assert g.title == "T"


def test_delete_keeps_refetch_error_visible():
    screen, gateway, _ = make_screen()
    screen.load()
    gateway.fail = True

    assert screen.delete("1") is True

    assert screen.state.error == "Can not fetch grievances at the moment"
    assert screen.state.notice == "Grievance deleted"


def test_malformed_comments_fall_back_to_cache():
    screen, gateway, _ = make_screen()
    screen.load_comments("1")

    def broken(c_id):
        raise MalformedResponse("Unexpected comment payload")

    gateway.get_comments = broken

    assert [c.comment_id for c in screen.load_comments("1")] == ["c2", "c1"]


class StubClient:
    def __init__(self, body):
        self.body = body

    def get(self, path, *, params=None):
        return self.body


def test_gateway_rejects_non_object_comments():
    with pytest.raises(MalformedResponse):
        HttpGrievanceGateway(StubClient({"comments": ["nice"]})).get_comments("1")


def test_gateway_rejects_non_numeric_stats():
    with pytest.raises(MalformedResponse):
        HttpGrievanceGateway(StubClient({"total_complaints": "many"})).get_stats()
