"""
Tests for the snapshot cache and its use by the generated test repository.
"""

import json
import uuid
from unittest.mock import MagicMock

import redis

from practice_api import models
from practice_api.repositories import ConfigurationRepository, GeneratedTestRepository
from practice_api.utils.cache import CacheService


class FakeCache:
    """Dict-backed stand-in with the CacheService interface"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ttl=None):
        self.store[key] = value
        return True


def _cache_with_client(client):
    cache = CacheService(enabled=False)
    cache.redis_client = client
    return cache


class TestCacheService:

    def test_disabled_cache_is_a_no_op(self):
        cache = CacheService(enabled=False)

        assert cache.get("anything") is None
        assert cache.set("anything", {"a": 1}) is False

    def test_set_serializes_with_ttl(self):
        client = MagicMock()
        cache = _cache_with_client(client)

        assert cache.set("k", {"a": 1}, ttl=30) is True

        client.setex.assert_called_once_with("k", 30, json.dumps({"a": 1}))

    def test_get_deserializes(self):
        client = MagicMock()
        client.get.return_value = json.dumps({"question_ids": ["x"]})
        cache = _cache_with_client(client)

        assert cache.get("k") == {"question_ids": ["x"]}

    def test_redis_errors_degrade_to_miss(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        cache = _cache_with_client(client)

        assert cache.get("k") is None
        assert cache.set("k", {"a": 1}) is False

    def test_snapshot_key(self):
        test_id = uuid.UUID(int=5)

        assert CacheService.snapshot_key(test_id) == f"practice_test:snapshot:{test_id}"


class TestRepositoryCaching:

    def _configuration(self, db_session, content, student_id):
        return ConfigurationRepository(db_session).create(
            owner_id=student_id,
            created_by_id=student_id,
            name="Cached",
            topic_ids=[],
            subtopic_ids=[content.equations.id],
            difficulty_levels=[1],
            question_count=1,
            time_limit_minutes=10,
            test_type="mixed",
        )

    def test_create_populates_cache(self, db_session, content, make_question, student_id):
        cache = FakeCache()
        repo = GeneratedTestRepository(db_session, cache=cache)
        question = make_question()
        configuration = self._configuration(db_session, content, student_id)

        snapshot = repo.create(configuration.id, student_id, [question.id])

        cached = cache.store[CacheService.snapshot_key(snapshot.id)]
        assert cached["question_ids"] == [str(question.id)]

    def test_get_served_from_cache(self, db_session, content, make_question, student_id):
        cache = FakeCache()
        repo = GeneratedTestRepository(db_session, cache=cache)
        question = make_question()
        configuration = self._configuration(db_session, content, student_id)
        snapshot = repo.create(configuration.id, student_id, [question.id])

        # drop the rows; the cached snapshot still answers
        db_session.query(models.GeneratedTestQuestion).delete()
        db_session.query(models.GeneratedTest).delete()
        db_session.commit()

        cached = repo.get(snapshot.id)
        assert cached.question_ids == [question.id]
        assert GeneratedTestRepository(db_session).get(snapshot.id) is None
