"""Unit tests for MetricBindings construction and marking."""

import dataclasses

import pytest

from request_metrics.adapters.metric_registry import FakeMetricRegistry
from request_metrics.core.bindings import MetricBindings, metric_name

NS = "svc"


@pytest.fixture
def registry():
    return FakeMetricRegistry()


@pytest.fixture
def bindings(registry):
    return MetricBindings.build(
        registry,
        namespace=NS,
        status_metric_names={404: "notFound", 200: "ok"},
        other_metric_name="other",
    )


class TestBuild:
    def test_metric_name_joins_with_dot(self):
        assert metric_name("a.b", "c") == "a.b.c"

    def test_registers_every_derived_name(self, bindings, registry):
        assert set(registry.meters) == {
            "svc.notFound",
            "svc.ok",
            "svc.1xx",
            "svc.2xx",
            "svc.3xx",
            "svc.4xx",
            "svc.5xx",
            "svc.other",
        }
        assert set(registry.counters) == {"svc.activeRequests"}
        assert set(registry.timers) == {"svc.requests"}

    def test_handles_come_from_registry(self, bindings, registry):
        assert bindings.exact_meters[404] is registry.meters["svc.notFound"]
        assert bindings.group_meters[5] is registry.meters["svc.5xx"]
        assert bindings.other_meter is registry.meters["svc.other"]
        assert bindings.active_requests is registry.counters["svc.activeRequests"]
        assert bindings.request_timer is registry.timers["svc.requests"]

    def test_all_five_groups_populated_without_exact_codes(self, registry):
        bindings = MetricBindings.build(
            registry, namespace=NS, status_metric_names={}, other_metric_name="other"
        )
        assert sorted(bindings.group_meters) == [1, 2, 3, 4, 5]
        assert dict(bindings.exact_meters) == {}

    def test_is_immutable(self, bindings):
        with pytest.raises(dataclasses.FrozenInstanceError):
            bindings.other_meter = None
        with pytest.raises(TypeError):
            bindings.exact_meters[500] = bindings.other_meter
        with pytest.raises(TypeError):
            bindings.group_meters[6] = bindings.other_meter


class TestMarkStatus:
    def test_exact_and_group(self, bindings, registry):
        bindings.mark_status(404)

        counts = registry.meter_counts()
        assert counts["svc.notFound"] == 1
        assert counts["svc.4xx"] == 1
        assert counts["svc.other"] == 0
        assert sum(counts.values()) == 2

    def test_group_only(self, bindings, registry):
        bindings.mark_status(418)

        counts = registry.meter_counts()
        assert counts["svc.4xx"] == 1
        assert sum(counts.values()) == 1

    @pytest.mark.parametrize("status", [50, 600, 999])
    def test_catch_all_only(self, bindings, registry, status):
        bindings.mark_status(status)

        counts = registry.meter_counts()
        assert counts["svc.other"] == 1
        assert sum(counts.values()) == 1
