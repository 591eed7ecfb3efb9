"""
Unit Tests for the Metrics Aggregator
"""

import pytest

from solution_deps.domain.models import Metrics
from solution_deps.domain.services import (
    build_catalog,
    build_graph,
    complexity_band,
    complexity_score,
    compute_metrics,
    find_cycles,
    most_connected,
)
from solution_deps.domain.services.metrics_aggregator import DEFAULT_COMPLEXITY_BANDS

from conftest import component, facts, make_graph


# One loop (A <-> B) and ten edges over five components
SCENARIO_D_EDGES = (
    "A>B", "B>A",
    "A>C", "A>D", "A>E",
    "B>C", "B>D", "B>E",
    "C>D", "D>E",
)


@pytest.fixture
def scenario_d_graph():
    return make_graph("ABCDE", *SCENARIO_D_EDGES).graph


class TestComplexityScore:

    def test_formula(self):
        assert complexity_score(2.0, 1) == 30.0
        assert complexity_score(0.0, 0) == 0.0

    def test_default_precision_is_one_decimal(self):
        assert complexity_score(1 / 3, 0) == 3.3

    def test_precision_none_keeps_raw_value(self):
        assert complexity_score(1 / 3, 0, precision=None) == pytest.approx(10 / 3)

    def test_monotonic_in_chains(self):
        assert complexity_score(1.5, 2) > complexity_score(1.5, 1)

    def test_scenario_d(self, scenario_d_graph):
        chains = find_cycles(scenario_d_graph)
        assert len(chains) == 1
        metrics = compute_metrics(scenario_d_graph, chains)
        assert metrics.average_out_degree == 2.0
        assert metrics.chain_count == 1
        assert metrics.complexity_score == 30.0
        assert metrics.complexity_band == "Moderate"


class TestComplexityBand:

    @pytest.mark.parametrize("score,label", [
        (0.0, "Low"),
        (19.9, "Low"),
        (20.0, "Moderate"),
        (40.0, "High"),
        (69.9, "High"),
        (70.0, "Critical"),
        (500.0, "Critical"),
    ])
    def test_default_bands(self, score, label):
        assert complexity_band(score) == label

    def test_custom_bands(self):
        assert complexity_band(15.0, (5, 10, 15)) == "Critical"

    @pytest.mark.parametrize("bands", [(10, 20), (30, 20, 40), ()])
    def test_invalid_bands(self, bands):
        with pytest.raises(ValueError):
            complexity_band(10.0, bands)


class TestMostConnected:

    def test_ranking_with_catalog_order_tie_break(self, scenario_d_graph):
        ranked = most_connected(scenario_d_graph)
        assert [c.id for c in ranked] == ["A", "B", "D", "C", "E"]
        assert ranked[0].out_degree == 4
        assert ranked[0].in_degree == 1
        assert ranked[0].total_degree == 5

    def test_top_n_limits_result(self, scenario_d_graph):
        assert len(most_connected(scenario_d_graph, top_n=2)) == 2
        assert most_connected(scenario_d_graph, top_n=0) == ()

    def test_top_n_larger_than_graph(self, simple_cycle_graph):
        assert [c.id for c in most_connected(simple_cycle_graph, top_n=10)] == ["A", "B", "C"]

    def test_negative_top_n_rejected(self, simple_cycle_graph):
        with pytest.raises(ValueError):
            most_connected(simple_cycle_graph, top_n=-1)

    def test_virtual_nodes_rank_after_catalog(self):
        graph = make_graph("XY", "X>ghost", "Y>X").graph
        # X: degree 2; Y and ghost: degree 1
        assert [c.id for c in most_connected(graph)] == ["X", "Y", "ghost"]


class TestComputeMetrics:

    def test_type_counts_are_zero_filled(self):
        catalog = build_catalog([
            component("e1", "Entity"),
            component("e2", "Entity"),
            component("f1", "Form"),
            component("p1", "Plugin"),
        ])
        graph = build_graph(catalog.components, facts("f1>e1")).graph
        counts = compute_metrics(graph, []).type_counts
        assert counts["Entity"] == 2
        assert counts["Form"] == 1
        assert counts["Plugin"] == 1
        assert counts["Workflow"] == 0
        assert counts["WebResource"] == 0

    def test_virtual_nodes_counted_as_other(self, missing_reference_build):
        metrics = compute_metrics(missing_reference_build.graph, [])
        assert metrics.type_counts["Entity"] == 1
        assert metrics.type_counts["Other"] == 1
        # one edge over two components
        assert metrics.average_out_degree == 0.5
        assert metrics.complexity_score == 5.0

    def test_empty_graph(self):
        metrics = compute_metrics(make_graph([]).graph, [])
        assert metrics.average_out_degree == 0.0
        assert metrics.complexity_score == 0.0
        assert metrics.complexity_band == "Low"
        assert metrics.most_connected == ()

    def test_precision_is_configurable(self, simple_cycle_graph):
        chains = find_cycles(simple_cycle_graph)
        assert compute_metrics(simple_cycle_graph, chains, precision=0).complexity_score == 20.0

    def test_bands_are_configurable(self, simple_cycle_graph):
        chains = find_cycles(simple_cycle_graph)
        metrics = compute_metrics(simple_cycle_graph, chains, bands=(5, 10, 15))
        assert metrics.complexity_band == "Critical"

    def test_round_trip_dict(self, scenario_d_graph):
        metrics = compute_metrics(scenario_d_graph, find_cycles(scenario_d_graph))
        restored = Metrics.from_dict(metrics.to_dict())
        assert restored.complexity_score == metrics.complexity_score
        assert dict(restored.type_counts) == dict(metrics.type_counts)
        assert [c.id for c in restored.most_connected] == [c.id for c in metrics.most_connected]


def test_default_bands_are_ascending():
    assert list(DEFAULT_COMPLEXITY_BANDS) == sorted(DEFAULT_COMPLEXITY_BANDS)
