from types import MappingProxyType

import pytest

from devpost_stats.counter import count_tokens
from devpost_stats.errors import AggregationError
from devpost_stats.tokenizer import extract_tokens, split_cell


def test_split_cell_trims_and_drops_empty_pieces():
    assert split_cell(" React ,  Node ") == ["React", "Node"]
    assert split_cell("React, , Node") == ["React", "Node"]


def test_split_cell_needs_comma_space():
    assert split_cell("React,Node") == ["React,Node"]


@pytest.mark.parametrize("value", ["", "   ", "\t"])
def test_blank_cells_contribute_nothing(value):
    assert extract_tokens([{"Built With": value}], "Built With") == []


def test_missing_field_contributes_nothing():
    assert extract_tokens([{"Other": "x"}], "Built With") == []


def test_tokens_are_concatenated_in_record_order():
    records = [{"f": "b, a"}, {"f": ""}, {"f": "c, a, a"}]
    assert extract_tokens(records, "f") == ["b", "a", "c", "a", "a"]


def test_custom_separator():
    assert extract_tokens([{"f": "a; b"}], "f", separator="; ") == ["a", "b"]


def test_records_are_not_mutated():
    record = MappingProxyType({"f": "a, b"})
    extract_tokens([record], "f")
    assert dict(record) == {"f": "a, b"}


def test_non_string_value_raises():
    with pytest.raises(AggregationError, match="Built With"):
        extract_tokens([{"Built With": ["React"]}], "Built With")


def test_non_mapping_record_raises():
    with pytest.raises(AggregationError, match="mapping"):
        extract_tokens(["React"], "Built With")  # type: ignore[list-item]


def test_count_tokens_counts_repeats():
    assert count_tokens(["React", "Node", "React"]) == {"React": 2, "Node": 1}


def test_count_tokens_is_exact_match():
    assert count_tokens(["react", "React"]) == {"react": 1, "React": 1}


def test_count_tokens_is_order_independent():
    tokens = ["a", "b", "a", "c", "b", "a"]
    assert count_tokens(tokens) == count_tokens(list(reversed(tokens)))
    assert count_tokens(tokens) == count_tokens(sorted(tokens))


def test_count_tokens_empty():
    assert count_tokens([]) == {}
