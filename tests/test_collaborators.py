import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.rate_limit import client_key  # noqa: E402
from app.core.rate_limiter import SqliteRateLimiter  # noqa: E402
from app.core.response_cache import SqliteResponseCache, cache_key_for  # noqa: E402


class SqliteRateLimiterTests(unittest.TestCase):
    def test_sliding_window(self):
        limiter = SqliteRateLimiter(":memory:", limit=2, window_seconds=60)
        with patch("app.core.rate_limiter.time.time", side_effect=[1000.0, 1001.0, 1002.0, 1070.0]):
            self.assertTrue(limiter.allow("1.2.3.4"))
            self.assertTrue(limiter.allow("1.2.3.4"))
            self.assertFalse(limiter.allow("1.2.3.4"))
            self.assertTrue(limiter.allow("1.2.3.4"))

    def test_keys_are_independent(self):
        limiter = SqliteRateLimiter(":memory:", limit=1)
        self.assertTrue(limiter.allow("a"))
        self.assertFalse(limiter.allow("a"))
        self.assertTrue(limiter.allow("b"))
        limiter.clear()
        self.assertTrue(limiter.allow("a"))


class SqliteResponseCacheTests(unittest.TestCase):
    def setUp(self):
        self.cache = SqliteResponseCache(":memory:")
        self.start = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_entries_expire_after_ttl(self):
        with patch("app.core.response_cache._utc_now") as now:
            now.return_value = self.start
            self.cache.set("k", {"success": True}, 300)

            now.return_value = self.start + timedelta(seconds=10)
            self.assertEqual(self.cache.get("k"), {"success": True})

            now.return_value = self.start + timedelta(seconds=400)
            self.assertIsNone(self.cache.get("k"))
            self.assertEqual(self.cache.purge_expired(), 1)

    def test_missing_key(self):
        self.assertIsNone(self.cache.get("missing"))

    def test_cache_key_ignores_key_order(self):
        first = cache_key_for({"educationLevel": "bachelor", "workTypes": ["Web"]})
        second = cache_key_for({"workTypes": ["Web"], "educationLevel": "bachelor"})
        self.assertEqual(first, second)
        self.assertNotEqual(first, cache_key_for({"educationLevel": "master"}))


class ClientKeyTests(unittest.TestCase):
    def _request(self, forwarded_for=""):
        headers = {"x-forwarded-for": forwarded_for} if forwarded_for else {}
        return SimpleNamespace(headers=headers, client=SimpleNamespace(host="10.0.0.5"))

    def test_forwarded_header_ignored_unless_trusted(self):
        with patch("app.core.rate_limit.settings", SimpleNamespace(trust_x_forwarded_for=False)):
            self.assertEqual(client_key(self._request("203.0.113.9, 10.0.0.1")), "10.0.0.5")
        with patch("app.core.rate_limit.settings", SimpleNamespace(trust_x_forwarded_for=True)):
            self.assertEqual(client_key(self._request("203.0.113.9, 10.0.0.1")), "203.0.113.9")
            self.assertEqual(client_key(self._request()), "10.0.0.5")


if __name__ == "__main__":
    unittest.main()
