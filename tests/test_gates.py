"""Tests for gate spawning, scrolling and eviction."""

import random

import pytest

from pichuka.config import GateConfig
from pichuka.entities import Gate
from pichuka.gates import GateManager


class FixedRandom(random.Random):
    """Random source returning a chosen fraction of each uniform range."""

    def __init__(self, fraction: float):
        super().__init__()
        self.fraction = fraction

    def random(self):
        return self.fraction


def make_gate(x, width=68.0):
    return Gate(x=x, top_height=100.0, bottom_y=270.0, bottom_height=180.0, width=width)


class TestSpawning:
    def test_spawns_immediately_when_unset(self, field):
        manager = GateManager(rng=random.Random(0))
        gate = manager.maybe_spawn(987654.0, field)
        assert gate is not None
        assert len(manager) == 1
        assert manager.last_spawn_time == 987654.0

    def test_spawns_at_zero_timestamp(self, field):
        manager = GateManager(rng=random.Random(0))
        assert manager.maybe_spawn(0.0, field) is not None
        assert manager.last_spawn_time == 0.0

    def test_waits_for_interval(self, field):
        manager = GateManager(GateConfig(spawn_interval_ms=1550), rng=random.Random(0))
        manager.maybe_spawn(1000.0, field)
        assert manager.maybe_spawn(2549.0, field) is None
        assert len(manager) == 1
        assert manager.last_spawn_time == 1000.0

    def test_spawns_at_exact_interval(self, field):
        manager = GateManager(GateConfig(spawn_interval_ms=1550), rng=random.Random(0))
        manager.maybe_spawn(1000.0, field)
        assert manager.maybe_spawn(2550.0, field) is not None
        assert manager.last_spawn_time == 2550.0

    def test_spawn_at_right_edge(self, field):
        manager = GateManager(rng=random.Random(0))
        gate = manager.maybe_spawn(0.0, field)
        assert gate.x == field.width
        assert gate.width == 68.0
        assert not gate.scored

    def test_lowest_gate(self, field):
        manager = GateManager(rng=FixedRandom(0.0))
        gate = manager.create_gate(field)
        assert gate.top_height == pytest.approx(70.0)
        assert gate.bottom_y == pytest.approx(240.0)
        assert gate.bottom_height == pytest.approx(210.0)

    def test_highest_gate(self, field):
        manager = GateManager(rng=FixedRandom(1.0))
        gate = manager.create_gate(field)
        # 450 available - 170 gap - 70 min
        assert gate.top_height == pytest.approx(210.0)
        assert gate.bottom_height == pytest.approx(70.0)

    def test_midpoint_gate(self, field):
        manager = GateManager(rng=FixedRandom(0.5))
        gate = manager.create_gate(field)
        assert gate.top_height == pytest.approx(140.0)
        assert gate.gap == pytest.approx(170.0)

    def test_segments_respect_minimum(self, field):
        config = GateConfig()
        manager = GateManager(config, rng=random.Random(42))
        for _ in range(200):
            gate = manager.create_gate(field)
            assert gate.top_height >= config.min_height
            assert gate.bottom_height >= config.min_height - 1e-9
            assert gate.gap == pytest.approx(config.gap)
            assert gate.top_height + gate.gap + gate.bottom_height == pytest.approx(field.available_height)

    def test_seeded_sources_reproduce(self, field):
        a = GateManager(rng=random.Random(7))
        b = GateManager(rng=random.Random(7))
        heights_a = [a.create_gate(field).top_height for _ in range(5)]
        heights_b = [b.create_gate(field).top_height for _ in range(5)]
        assert heights_a == heights_b

    def test_clear(self, field):
        manager = GateManager(rng=random.Random(0))
        manager.maybe_spawn(0.0, field)
        manager.clear()
        assert len(manager) == 0
        assert manager.last_spawn_time is None


class TestAdvance:
    def test_moves_by_normalized_speed(self):
        manager = GateManager(GateConfig(speed=2.4))
        manager.gates = [make_gate(300.0), make_gate(100.0)]
        manager.advance(0.1)
        # 2.4 * 60 * 0.1 = 14.4
        assert [g.x for g in manager] == pytest.approx([285.6, 85.6])

    def test_zero_dt(self):
        manager = GateManager()
        manager.gates = [make_gate(300.0)]
        manager.advance(0.0)
        assert manager.gates[0].x == 300.0

    def test_older_gates_are_further_left(self, field):
        manager = GateManager(GateConfig(spawn_interval_ms=500), rng=random.Random(3))
        now = 0.0
        for _ in range(400):
            manager.maybe_spawn(now, field)
            manager.advance(1 / 60)
            manager.evict()
            xs = [g.x for g in manager]
            assert xs == sorted(xs)
            now += 1000 / 60


class TestEvict:
    def test_margin_boundary(self):
        manager = GateManager(GateConfig(width=68.0))
        gates = [make_gate(-79.0), make_gate(-78.0), make_gate(-77.0), make_gate(-5.0), make_gate(50.0)]
        manager.gates = list(gates)
        evicted = manager.evict()
        # trailing edges: -11, -10 (not > -10), -9, 63, 118
        assert evicted == gates[:2]
        assert manager.gates == gates[2:]

    def test_keeps_gate_with_trailing_edge_in_view(self):
        manager = GateManager(GateConfig(width=68.0))
        manager.gates = [make_gate(-5.0), make_gate(50.0)]
        assert manager.evict() == []
        assert len(manager) == 2

    def test_evicted_gate_never_returns(self, field):
        manager = GateManager(GateConfig(spawn_interval_ms=400), rng=random.Random(5))
        seen_evicted = []
        now = 0.0
        for _ in range(600):
            manager.maybe_spawn(now, field)
            manager.advance(1 / 60)
            seen_evicted.extend(manager.evict())
            for gate in seen_evicted:
                assert all(g is not gate for g in manager)
            now += 1000 / 60
        assert seen_evicted

    def test_order_preserved(self):
        manager = GateManager()
        gates = [make_gate(-200.0), make_gate(10.0), make_gate(150.0), make_gate(290.0)]
        manager.gates = list(gates)
        manager.evict()
        assert manager.gates == gates[1:]
