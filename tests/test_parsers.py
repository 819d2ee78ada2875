import pytest

from core.entities import qualification_rank
from exceptions.custom_errors import InvalidInputShapeError
from utils.normalizer import as_record, normalize_records, normalize_task, normalize_worker
from utils.parsers import parse_attributes, parse_phases, parse_slots, split_tags, to_int
from tests.utils import client_row, task_row, worker_row


def test_split_tags_trims_and_drops_empty_tokens() -> None:
    assert split_tags(" python, ,SQL ,,go ") == ("python", "SQL", "go")
    assert split_tags("a,a") == ("a", "a")
    assert split_tags(None) == ()


@pytest.mark.parametrize(
    "raw, error_part",
    [
        ("not json", "not valid JSON"),
        ('{"a": 1}', "JSON array"),
        ("[1, 2.5]", "only integers"),
        ('["1"]', "only integers"),
        (None, "empty"),
    ],
)
def test_parse_slots_failure_variants(raw, error_part) -> None:
    result = parse_slots(raw)
    assert not result.ok
    assert error_part in result.error
    assert result.values == ()


def test_parse_slots_accepts_json_and_lists() -> None:
    assert parse_slots("[1,3,5]").values == (1, 3, 5)
    assert parse_slots([2, 4]).values == (2, 4)


def test_parse_phases_range_and_array() -> None:
    assert parse_phases("1-3").values == (1, 2, 3)
    assert parse_phases(" 2 - 4 ").values == (2, 3, 4)
    assert parse_phases("[2,4,5]").values == (2, 4, 5)


def test_parse_phases_reversed_range_is_empty_but_valid() -> None:
    result = parse_phases("3-1")
    assert result.ok
    assert result.values == ()


def test_parse_phases_blank_is_valid_empty_preference() -> None:
    assert parse_phases("").ok
    assert parse_phases(None).values == ()


def test_parse_phases_rejects_garbage() -> None:
    assert not parse_phases("a-b").ok
    assert not parse_phases("1-2-3").ok
    assert not parse_phases("phase one").ok


def test_parse_attributes() -> None:
    assert parse_attributes('{"region": "EU"}').values == {"region": "EU"}
    assert parse_attributes("").values == {}
    broken = parse_attributes("{region: EU}")
    assert not broken.ok and broken.values == {}
    assert not parse_attributes("[1,2]").ok


def test_to_int_is_lenient() -> None:
    assert to_int("3") == 3
    assert to_int(" 4 ") == 4
    assert to_int(5.0) == 5
    assert to_int("2.0") == 2
    assert to_int("2.5") is None
    assert to_int("abc") is None
    assert to_int(True) is None


def test_normalize_worker_never_raises_on_bad_fields() -> None:
    worker = normalize_worker(worker_row(slots="oops", max_load="many", skills=" Python , SQL"))
    assert worker.available_slots == ()
    assert worker.max_load_per_phase is None
    assert worker.skills == ("Python", "SQL")
    assert worker.has_skills(["python", "sql"])


def test_normalize_task_coerces_numbers() -> None:
    task = normalize_task(task_row(duration="2", max_concurrent="3", phases="1-2"))
    assert task.duration == 2
    assert task.max_concurrent == 3
    assert task.preferred_phases == (1, 2)


def test_normalize_records_rejects_bad_shapes() -> None:
    with pytest.raises(InvalidInputShapeError):
        normalize_records("clients", {"ClientID": "C1"})
    with pytest.raises(InvalidInputShapeError):
        normalize_records("workers", ["W1"])


def test_normalize_records_passes_entities_through() -> None:
    [client] = normalize_records("clients", [client_row(requested="T1, T2")])
    assert client.requested_task_ids == ("T1", "T2")
    assert normalize_records("clients", [client]) == [client]


def test_as_record_round_trips_entity_fields() -> None:
    worker = normalize_worker(worker_row(slots="[1,2]"))
    record = as_record("workers", worker)
    assert normalize_worker(record) == worker


@pytest.mark.parametrize(
    "level, rank",
    [(7, 7.0), ("9", 9.0), ("Senior", 6.0), ("mid-level", 4.0), ("Wizard", 0.0), (None, 0.0)],
)
def test_qualification_rank(level, rank) -> None:
    assert qualification_rank(level) == rank
