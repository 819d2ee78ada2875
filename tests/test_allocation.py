import copy

import pytest

from core.entities import Priority
from core.rule_effects import CostMinimize
from exceptions.custom_errors import InvalidInputShapeError
from scheduler.builder import allocate, priority_weight
from scheduler.extractor import to_dataframe, utilization_frame
from tests.utils import client_row, rule, speed, task_row, worker_row


def _ids(summary):
    return [a.assigned_worker_ids for a in summary.allocations]


def test_single_allocation_summary() -> None:
    clients = [client_row("C1", priority=3, requested=("T1",))]
    workers = [worker_row("W1", slots="[1,2,3]"), worker_row("W2", slots="[1,2]")]
    tasks = [task_row("T1", phases="[1,2]", duration=1)]

    summary = allocate(clients, workers, tasks)

    assert summary.total_tasks == 1
    assert summary.assigned_tasks == 1
    assert summary.unassigned_tasks == 0
    [result] = summary.allocations
    assert result.assigned_worker_ids == ["W1"]
    assert result.assigned_worker_names == ["Worker W1"]
    assert result.client_id == "C1"
    assert result.phase == 1
    assert result.priority == 3
    assert result.confidence == 1.0
    assert result.reasoning == (
        "Assigned 1 worker(s) with required skills: python. "
        "Junior workers selected for cost optimization. "
        "Scheduled for Phase 1 based on availability and preferences."
    )
    assert summary.worker_utilization == {"W1": 1, "W2": 0}
    assert summary.phase_distribution == {1: 1}
    assert summary.priority_distribution == {3: 1}
    assert summary.warnings == []


def test_queue_is_sorted_by_weighted_priority() -> None:
    clients = [
        client_row("C1", priority=2, requested=("T1",)),
        client_row("C2", priority=5, requested=("T2",)),
    ]
    workers = [worker_row("W1")]
    tasks = [task_row("T1"), task_row("T2")]

    summary = allocate(clients, workers, tasks, priorities=[speed(0.4)])
    assert [a.task_id for a in summary.allocations] == ["T2", "T1"]

    # a zero weight flattens every key, so the stable sort keeps request order
    summary = allocate(clients, workers, tasks, priorities=[speed(0.0)])
    assert [a.task_id for a in summary.allocations] == ["T1", "T2"]


def test_priority_weight_lookup() -> None:
    assert priority_weight(None) == 0.5
    assert priority_weight([Priority("P1", "Quality", 0.3)]) == 0.5
    assert priority_weight([Priority("P1", "Delivery SPEED", 0.4), speed(0.9)]) == 0.4


def test_unresolvable_requests_are_not_queued() -> None:
    clients = [client_row("C1", requested=("T1", "T404"))]
    summary = allocate(clients, [worker_row("W1")], [task_row("T1")])
    assert summary.total_tasks == 1
    assert summary.assigned_tasks == 1


def test_utilization_balance_spreads_work() -> None:
    clients = [client_row(f"C{i}", requested=("T1",)) for i in range(3)]
    workers = [worker_row("W1", max_load=5), worker_row("W2", max_load=5)]
    tasks = [task_row("T1", duration=2)]

    balanced = allocate(clients, workers, tasks, rules=[rule("R1", "Balance the workload")])
    assert _ids(balanced) == [["W1"], ["W2"], ["W1"]]
    assert balanced.worker_utilization == {"W1": 4, "W2": 2}

    unbalanced = allocate(clients, workers, tasks)
    assert _ids(unbalanced) == [["W1"], ["W1"], ["W1"]]


def test_senior_rule_orders_by_qualification() -> None:
    clients = [client_row("C1")]
    workers = [worker_row("W1", qualification=3), worker_row("W2", qualification="Lead")]
    tasks = [task_row("T1")]

    summary = allocate(clients, workers, tasks, rules=[rule("R1", "Prefer senior staff")])

    [result] = summary.allocations
    assert result.assigned_worker_ids == ["W2"]
    assert "Senior workers selected for complex task" in result.reasoning
    assert summary.executed_rules == ["R1"]


def test_cost_rule_prefers_lowest_qualification() -> None:
    workers = [worker_row("W1", qualification=9), worker_row("W2", qualification="Junior")]
    summary = allocate([client_row("C1")], workers, [task_row("T1")], rules=[rule("R1", "Keep the budget low")])
    assert _ids(summary) == [["W2"]]


def test_inert_and_inactive_rules_change_nothing() -> None:
    clients = [client_row("C1")]
    workers = [worker_row("W1", qualification=2), worker_row("W2", qualification=9)]
    tasks = [task_row("T1")]
    rules = [rule("R1", "Whatever happens"), rule("R2", "Prefer senior staff").deactivate()]

    summary = allocate(clients, workers, tasks, rules=rules)

    assert _ids(summary) == [["W1"]]
    assert summary.executed_rules == []


def test_inert_rule_is_not_executed_even_when_reasoning_echoes_it() -> None:
    # "assign" appears in every reasoning ("Assigned 1 worker(s) ...")
    summary = allocate(
        [client_row("C1")], [worker_row("W1")], [task_row("T1")], rules=[rule("R1", "Assign work only on Fridays")]
    )

    assert summary.assigned_tasks == 1
    assert summary.executed_rules == []


def test_group_affinity_keeps_largest_group() -> None:
    workers = [
        worker_row("W1", group="A"),
        worker_row("W2", group="B"),
        worker_row("W3", group="B"),
    ]
    tasks = [task_row("T1", max_concurrent=2)]

    summary = allocate([client_row("C1")], workers, tasks, rules=[rule("R1", "Keep the team together")])

    [result] = summary.allocations
    assert result.assigned_worker_ids == ["W2", "W3"]
    assert "Team allocation for better collaboration" in result.reasoning


def test_high_priority_boost_only_for_high_priority_clients() -> None:
    workers = [worker_row("W1", qualification=2), worker_row("W2", qualification=9)]
    tasks = [task_row("T1")]
    rules = [rule("R1", "Urgent clients first")]

    high = allocate([client_row("C1", priority=5)], workers, tasks, rules=rules)
    low = allocate([client_row("C1", priority=2)], workers, tasks, rules=rules)

    assert _ids(high) == [["W2"]]
    assert "High priority client (Level 5) - assigned senior workers" in high.allocations[0].reasoning
    assert _ids(low) == [["W1"]]


def test_task_without_skilled_worker_is_never_allocated() -> None:
    clients = [client_row("C1", requested=("T1", "T2"))]
    workers = [worker_row("W1")]
    tasks = [task_row("T1"), task_row("T2", name="Port to Rust", skills=("Rust",))]

    summary = allocate(clients, workers, tasks)

    assert [a.task_id for a in summary.allocations] == ["T1"]
    assert summary.unassigned_tasks == 1
    assert summary.warnings == ["Could not allocate task: Port to Rust (T2)"]


def test_concurrency_capped_by_qualified_workers() -> None:
    workers = [worker_row("W1"), worker_row("W2"), worker_row("W3", skills=("java",))]
    tasks = [task_row("T1", max_concurrent=5)]

    [result] = allocate([client_row("C1")], workers, tasks).allocations

    assert result.assigned_worker_ids == ["W1", "W2"]


@pytest.mark.parametrize("max_concurrent", [0, -2, None, "n/a"])
def test_non_positive_or_missing_max_concurrent_means_one(max_concurrent) -> None:
    workers = [worker_row("W1"), worker_row("W2")]
    tasks = [task_row("T1", max_concurrent=max_concurrent)]
    [result] = allocate([client_row("C1")], workers, tasks).allocations
    assert len(result.assigned_worker_ids) == 1


def test_assigned_workers_are_available_in_the_chosen_phase() -> None:
    # the senior worker is first in line but cannot work any preferred phase
    workers = [
        worker_row("W1", slots="[3]", qualification=9),
        worker_row("W2", slots="[2]", qualification=4),
    ]
    tasks = [task_row("T1", phases="[1,2]")]

    [result] = allocate([client_row("C1")], workers, tasks, rules=[rule("R1", "Prefer senior staff")]).allocations

    assert result.assigned_worker_ids == ["W2"]
    assert result.phase == 2


def test_phase_ties_go_to_first_listed_phase() -> None:
    workers = [worker_row("W1", slots="[2,4]")]
    [result] = allocate([client_row("C1")], workers, [task_row("T1", phases="[4,2]")]).allocations
    assert result.phase == 4


def test_no_preferred_phase_uses_default_phase() -> None:
    workers = [worker_row("W1", slots="[3]")]
    [result] = allocate([client_row("C1")], workers, [task_row("T1", phases="")]).allocations
    assert result.phase == 1
    # not available in phase 1, so no availability bonus
    assert result.confidence == 0.9


def test_no_worker_in_any_preferred_phase_leaves_task_unassigned() -> None:
    workers = [worker_row("W1", slots="[3]")]
    summary = allocate([client_row("C1")], workers, [task_row("T1", phases="[1,2]")])
    assert summary.allocations == []
    assert len(summary.warnings) == 1


def test_utilization_feeds_the_load_bonus() -> None:
    clients = [client_row("C1"), client_row("C2")]
    workers = [worker_row("W1", slots="[2]", max_load=1)]
    tasks = [task_row("T1", phases="", duration=1)]

    summary = allocate(clients, workers, tasks)

    assert [a.confidence for a in summary.allocations] == [0.9, 0.8]
    assert summary.worker_utilization == {"W1": 2}


def test_runs_are_deterministic_and_leave_inputs_untouched() -> None:
    clients = [client_row(f"C{i}", priority=i % 5 + 1, requested=("T1", "T2")) for i in range(4)]
    workers = [worker_row(f"W{i}", qualification=i + 2, group="AB"[i % 2]) for i in range(4)]
    tasks = [task_row("T1", max_concurrent=2), task_row("T2", duration=2)]
    rules = [rule("R1", "Balance the workload"), rule("R2", "Keep the team together")]
    snapshot = copy.deepcopy((clients, workers, tasks))

    first = allocate(clients, workers, tasks, rules=rules)
    second = allocate(clients, workers, tasks, rules=rules)

    assert first.allocations == second.allocations
    assert first.worker_utilization == second.worker_utilization
    assert (clients, workers, tasks) == snapshot


def test_injected_classifier_resolves_unknown_rule_text() -> None:
    class Classifier:
        def classify(self, text):
            return CostMinimize()

    workers = [worker_row("W1", qualification=9), worker_row("W2", qualification=3)]
    summary = allocate(
        [client_row("C1")], workers, [task_row("T1")], rules=[rule("R1", "Spend wisely")], classifier=Classifier()
    )
    assert _ids(summary) == [["W2"]]


def test_bad_collection_shape_raises() -> None:
    with pytest.raises(InvalidInputShapeError):
        allocate("clients.csv", [], [])


def test_tabular_views() -> None:
    clients = [client_row("C1", requested=("T1", "T2"))]
    workers = [worker_row("W1"), worker_row("W2")]
    tasks = [task_row("T1", duration=3), task_row("T2", max_concurrent=2)]
    summary = allocate(clients, workers, tasks)

    df = to_dataframe(summary)
    assert list(df["Task ID"]) == ["T1", "T2"]
    assert df.loc[1, "Worker IDs"] == "W1, W2"

    util = utilization_frame(summary)
    assert list(util["Worker ID"]) == ["W1", "W2"]
    assert list(util["Utilization"]) == [4, 1]


def test_summary_to_dict() -> None:
    summary = allocate([client_row("C1", priority=4)], [worker_row("W1")], [task_row("T1")])
    data = summary.to_dict()
    assert data["assignedTasks"] == 1
    assert data["phaseDistribution"] == {"1": 1}
    assert data["priorityDistribution"] == {"4": 1}
    assert data["allocations"][0]["assignedWorkerIds"] == ["W1"]
