"""Unit tests for registry lookup-or-fallback."""

import logging
from types import SimpleNamespace

from request_metrics.adapters.metric_registry import FakeMetricRegistry, PrometheusMetricRegistry
from request_metrics.core.registry_resolver import resolve_registry

KEY = "svc.registry"


class TestResolveRegistry:
    def test_returns_registry_from_mapping(self):
        published = FakeMetricRegistry()
        assert resolve_registry({KEY: published}, KEY) is published

    def test_returns_registry_from_attribute_namespace(self):
        published = FakeMetricRegistry()
        state = SimpleNamespace()
        setattr(state, KEY, published)

        assert resolve_registry(state, KEY) is published

    def test_missing_key_falls_back_to_factory(self):
        fallback = FakeMetricRegistry()
        assert resolve_registry({}, KEY, lambda: fallback) is fallback

    def test_wrong_type_falls_back_to_factory(self):
        fallback = FakeMetricRegistry()
        assert resolve_registry({KEY: "not a registry"}, KEY, lambda: fallback) is fallback

    def test_registry_class_falls_back_to_factory(self):
        """Publishing the class instead of an instance counts as wrong-typed."""
        fallback = FakeMetricRegistry()
        assert resolve_registry({KEY: FakeMetricRegistry}, KEY, lambda: fallback) is fallback

    def test_interceptor_init_survives_published_class(self):
        from request_metrics.core.config import InterceptorConfig
        from request_metrics.core.interceptor import RequestInterceptor

        fallback = FakeMetricRegistry()
        interceptor = RequestInterceptor(
            InterceptorConfig(registry_key=KEY, namespace="svc"),
            shared_state={KEY: PrometheusMetricRegistry},
            registry_factory=lambda: fallback,
        )
        interceptor.init()

        assert interceptor.bindings.other_meter is fallback.meters["svc.other"]

    def test_no_shared_state_falls_back(self):
        fallback = FakeMetricRegistry()
        assert resolve_registry(None, KEY, lambda: fallback) is fallback

    def test_no_key_falls_back(self):
        fallback = FakeMetricRegistry()
        published = FakeMetricRegistry()
        assert resolve_registry({None: published}, None, lambda: fallback) is fallback

    def test_default_fallback_is_fresh_prometheus_registry(self):
        first = resolve_registry({}, KEY)
        second = resolve_registry({}, KEY)

        assert isinstance(first, PrometheusMetricRegistry)
        assert first is not second

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="request_metrics"):
            resolve_registry({KEY: 42}, KEY, FakeMetricRegistry)

        assert "using a private registry" in caplog.text
        assert "int" in caplog.text

    def test_lookup_is_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="request_metrics"):
            resolve_registry({KEY: FakeMetricRegistry()}, KEY)

        assert caplog.records == []
