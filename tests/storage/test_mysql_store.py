from __future__ import annotations

from teacher_portal.storage.mysql_base import DBConfig, ensure_kv_store
from teacher_portal.storage.mysql_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._result = []
        self.executed = []

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), params))
        sql = " ".join(sql.split())
        if sql.startswith("SELECT store_value"):
            value = self._db.rows.get(params[0])
            self._result = [{"store_value": value}] if value is not None else []
        elif sql.startswith("INSERT INTO kv_store"):
            self._db.rows[params[0]] = params[1]
        elif sql.startswith("DELETE FROM kv_store"):
            self._db.rows.pop(params[0], None)
        elif sql.startswith("SELECT store_key"):
            prefix = params[0][:-1].replace("\\_", "_").replace("\\%", "%")
            self._result = [{"store_key": k} for k in sorted(self._db.rows) if k.startswith(prefix)]

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=True):
        self._db.last_cursor = FakeCursor(self._db)
        return self._db.last_cursor

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeDatabase:
    def __init__(self):
        self.rows = {}
        self.commits = 0
        self.last_cursor = None

    def connect(self):
        return FakeConnection(self)


def test_set_get_delete_round_trip():
    db = FakeDatabase()
    store = MySQLKeyValueStore(db)

    store.set("@teacher_courses:a@x.edu", "[]")
    assert store.get("@teacher_courses:a@x.edu") == "[]"

    store.delete("@teacher_courses:a@x.edu")
    assert store.get("@teacher_courses:a@x.edu") is None
    assert db.commits == 4


def test_keys_filters_by_prefix():
    db = FakeDatabase()
    store = MySQLKeyValueStore(db)
    store.set("comments_1", "{}")
    store.set("comments_2", "{}")
    store.set("cached_grievances", "{}")

    assert store.keys("comments_") == ["comments_1", "comments_2"]


def test_keys_escapes_like_wildcards():
    db = FakeDatabase()
    store = MySQLKeyValueStore(db)
    store.set("comments_1", "{}")

    store.keys("comments_")

    assert db.last_cursor.executed[-1][1] == ("comments\\_%",)


def test_ensure_kv_store_runs_ddl():
    db = FakeDatabase()

    ensure_kv_store(db)

    assert db.last_cursor.executed[0][0].startswith("CREATE TABLE IF NOT EXISTS kv_store")
    assert db.commits == 1


def test_db_config_from_dict_fills_defaults():
    config = DBConfig.from_dict({"host": "db", "port": "3307", "password": None})

    assert (config.host, config.port, config.user, config.password) == ("db", 3307, "root", "")
    assert config.database == "teacher_portal"
