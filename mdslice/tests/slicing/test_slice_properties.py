"""
Whole-call properties: full-range idempotence, length conservation,
containment, non-mutation and result metadata.
"""

import copy

import pytest

from mdslice import LengthCache, get_tree_length, iter_spans, slice_tree
from mdslice.app.search.positions import document_text
from mdslice.tests.helpers import config, hello_emphasis_test, paragraph, root, sample_document, text


def _ranges(length: int):
    for start in range(0, length, 3):
        for end in range(start + 1, length + 1, 4):
            yield start, end


def test_sample_document_length():
    assert get_tree_length(sample_document()) == 63


def test_full_range_slice_is_idempotent():
    tree = sample_document()
    length = get_tree_length(tree)

    result = slice_tree(tree, 0, length)

    assert get_tree_length(result.node) == length
    assert document_text(result.node) == document_text(tree)
    assert result.info.has_partial_nodes is False
    assert result.info.modified_node_types == []


def test_sliced_length_is_conserved():
    tree = sample_document()
    length = get_tree_length(tree)

    for start, end in _ranges(length):
        result = slice_tree(tree, start, end)

        assert result.info.original_length == length
        assert result.info.sliced_length <= length
        assert result.info.sliced_length == get_tree_length(result.node)


def test_truncated_text_matches_document_substring():
    tree = sample_document()
    full = document_text(tree)
    cfg = config(whitespace="preserve")

    for start, end in _ranges(len(full)):
        result = slice_tree(tree, start, end, cfg)

        assert document_text(result.node) == full[start:end]


def test_narrower_range_text_is_contained_in_wider_range_text():
    tree = sample_document()
    cfg = config(whitespace="preserve")

    wide = document_text(slice_tree(tree, 5, 50, cfg).node)
    narrow = document_text(slice_tree(tree, 12, 31, cfg).node)

    assert narrow in wide


@pytest.mark.parametrize(
    "cfg",
    [
        config(),
        config(formatting="strip", media="content-only", block="unwrap"),
        config(formatting="exclude", media="strip", block="exclude"),
        config(text="include-full", whitespace="normalize", merge=False),
    ],
)
def test_input_tree_is_never_mutated(cfg):
    tree = sample_document()
    snapshot = copy.deepcopy(tree)

    for start, end in _ranges(get_tree_length(tree)):
        slice_tree(tree, start, end, cfg)

    assert tree == snapshot


def test_result_nodes_are_fresh_objects():
    tree = sample_document()
    source_ids = {id(node) for node, _ in iter_spans(tree)}

    result = slice_tree(tree, 0, get_tree_length(tree))

    assert all(id(node) not in source_ids for node, _ in iter_spans(result.node))


def test_shared_cache_only_holds_source_nodes():
    tree = sample_document()
    cache = LengthCache()
    get_tree_length(tree, cache=cache)
    measured = len(cache)

    first = slice_tree(tree, 4, 40, cache=cache)
    second = slice_tree(tree, 4, 40, cache=cache)

    assert measured == sum(1 for _ in iter_spans(tree))
    assert len(cache) == measured
    assert first.node == second.node


def test_info_serializes_with_camel_case_aliases():
    result = slice_tree(hello_emphasis_test(), 4, 10)

    dumped = result.model_dump(by_alias=True)

    assert dumped["boundaries"] == {"start": 4, "end": 10}
    assert dumped["info"] == {
        "originalLength": 16,
        "slicedLength": 6,
        "hasPartialNodes": True,
        "modifiedNodeTypes": ["text"],
    }


def test_large_document_slice():
    tree = root(
        *(
            paragraph(text(f"This is paragraph {i} with some text content. "))
            for i in range(1000)
        )
    )
    full = document_text(tree)

    result = slice_tree(tree, 1000, 5000, config(whitespace="preserve"))

    assert result.node is not None
    assert document_text(result.node) == full[1000:5000]
