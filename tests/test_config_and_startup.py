import os
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient
from pydantic import ValidationError

from hotkeys import main
from hotkeys.cache import MemoryCacheBackend, RedisCacheBackend, create_cache_backend
from hotkeys.config import Settings
from hotkeys.services import InMemoryShortcutRepository, SearchService


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings(_env_file=None)
        self.assertEqual(settings.cache_backend, "memory")
        self.assertEqual(settings.max_concurrent_searches, 3)
        self.assertEqual(settings.search_cache_ttl, 300)
        self.assertEqual(settings.data_cache_ttl, 1800)
        self.assertEqual(settings.usage_cache_ttl, 86400)

    def test_environment_overrides(self):
        env = {"HOTKEYS_CACHE_BACKEND": "redis", "HOTKEYS_MAX_RESULTS": "10", "HOTKEYS_USE_CACHE": "false"}
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.cache_backend, "redis")
        self.assertEqual(settings.max_results, 10)
        self.assertFalse(settings.use_cache)

    def test_invalid_values_rejected(self):
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, max_results=0)
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, cache_backend="memcached")


class TestBackendSelection(unittest.TestCase):

    def test_memory_by_default(self):
        self.assertIsInstance(create_cache_backend(Settings(_env_file=None)), MemoryCacheBackend)

    def test_redis_when_configured(self):
        backend = create_cache_backend(Settings(
            _env_file=None, cache_backend="redis", redis_url="redis://cache:6379/1", redis_key_prefix="hk:",
            redis_retry_after=5,
        ))
        self.assertIsInstance(backend, RedisCacheBackend)
        self.assertEqual(backend.url, "redis://cache:6379/1")
        self.assertEqual(backend.key_prefix, "hk:")
        self.assertEqual(backend.retry_after, 5)
        self.assertIsNone(backend.client)

    def test_service_from_settings(self):
        settings = Settings(_env_file=None, max_results=7, enable_fuzzy_search=False, search_cache_ttl=60)
        service = SearchService.from_settings(settings, InMemoryShortcutRepository())

        self.assertEqual(service.cache.backend_name, "memory")
        self.assertEqual(service.default_options.max_results, 7)
        self.assertFalse(service.default_options.enable_fuzzy_search)
        self.assertEqual(service.search_cache_ttl, 60)
        self.assertEqual(service.max_concurrent_searches, 3)


class TestLifespan(unittest.TestCase):

    def run_app(self, warmup_on_startup):
        service = MagicMock()
        service.warmup_cache = AsyncMock()
        service.close = AsyncMock()

        with patch.object(main, "get_search_service", return_value=service), \
                patch.object(main.settings, "warmup_on_startup", warmup_on_startup):
            with TestClient(main.app):
                pass
        return service

    def test_warmup_on_startup(self):
        service = self.run_app(True)
        service.warmup_cache.assert_awaited_once()
        service.close.assert_awaited_once()

    def test_warmup_disabled(self):
        service = self.run_app(False)
        service.warmup_cache.assert_not_awaited()
        service.close.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
