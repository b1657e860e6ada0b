import pytest

from mdslice import InvalidRangeError, slice_markdown, slice_tree
from mdslice.tests.helpers import paragraph, text


# ---------------------------------------------------------------------------
# Boundary exactness
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (0, 5, "Hello"),
        (6, 11, "World"),
        (2, 8, "llo Wo"),
        (6, None, "World"),
        (0, None, "Hello World"),
    ],
)
def test_text_leaf_slices_exactly(start, end, expected):
    result = slice_markdown(text("Hello World"), start, end)

    assert result == {"type": "text", "value": expected}


def test_slice_clamps_end_to_document_length():
    result = slice_tree(text("Hello"), 0, 1_000_000)

    assert result.node == {"type": "text", "value": "Hello"}
    assert result.boundaries.start == 0
    assert result.boundaries.end == 5


def test_omitted_end_reports_document_length():
    result = slice_tree(text("Hello World"), 3)

    assert result.boundaries.end == 11


@pytest.mark.parametrize("start,end", [(10, 15), (10, None), (1_000_000, 2_000_000)])
def test_start_beyond_content_yields_null_node(start, end):
    result = slice_tree(text("Hello"), start, end)

    assert result.node is None
    assert result.boundaries.end == 5
    assert result.info.original_length == 5
    assert result.info.sliced_length == 0


def test_paragraph_slice_keeps_separate_leaves_and_trims_cut_edges():
    tree = paragraph(text("Hello "), text("World"))

    assert slice_markdown(tree, 3, 9) == paragraph(text("lo Wor"))
    assert slice_markdown(tree, 6) == paragraph(text("World"))


def test_slice_at_exact_node_boundaries():
    tree = paragraph(text("Hello"), text(" "), text("World"))

    assert slice_markdown(tree, 5, 6) == paragraph(text(" "))


# ---------------------------------------------------------------------------
# Empty content
# ---------------------------------------------------------------------------


def test_null_tree_yields_zeroed_result():
    result = slice_tree(None, 0, 1)

    assert result.node is None
    assert result.boundaries.start == 0
    assert result.boundaries.end == 0
    assert result.info.original_length == 0
    assert result.info.sliced_length == 0
    assert result.info.has_partial_nodes is False
    assert result.info.modified_node_types == []


@pytest.mark.parametrize("end", [1, None])
def test_empty_document_is_returned_whole_from_zero(end):
    tree = paragraph(text(""))

    result = slice_tree(tree, 0, end)

    assert result.node == tree
    assert result.node is not tree
    assert result.node["children"][0] is not tree["children"][0]


def test_empty_document_from_nonzero_start_is_null():
    assert slice_markdown(text(""), 1, 2) is None


def test_empty_leaves_on_range_edges_are_dropped():
    tree = paragraph(text(""), text("Hello"), text(""))

    assert slice_markdown(tree, 0) == paragraph(text("Hello"))


def test_unknown_leaf_document_passes_through():
    tree = {"type": "unknownType", "customProp": "value"}

    assert slice_markdown(tree, 0, 1) == tree


def test_unknown_leaf_inside_range_is_kept_verbatim():
    widget = {"type": "widget", "id": 7}
    tree = paragraph(text("ab"), widget, text("cd"))

    assert slice_markdown(tree, 1, 3) == paragraph(text("b"), widget, text("c"))


def test_unknown_container_is_recursed():
    tree = paragraph({"type": "custom", "flag": True, "children": [text("Hello")]})

    result = slice_markdown(tree, 1, 3)

    assert result == paragraph({"type": "custom", "flag": True, "children": [text("el")]})


# ---------------------------------------------------------------------------
# Range validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "start,end,message",
    [
        (5, 5, "End position must be greater than start"),
        (4, 2, "End position must be greater than start"),
        (-1, 3, "Start position must be non-negative"),
        (0, -1, "End position must be non-negative"),
        (1.5, 3, "Start position must be an integer"),
        (1, 3.5, "End position must be an integer"),
        (True, 3, "Start position must be an integer"),
        ("0", None, "Start position must be an integer"),
    ],
)
def test_invalid_ranges_raise(start, end, message):
    with pytest.raises(InvalidRangeError, match=message):
        slice_tree(text("Hello World"), start, end)


def test_invalid_range_is_rejected_even_without_tree():
    with pytest.raises(InvalidRangeError):
        slice_tree(None, -1, 2)


def test_invalid_range_error_is_a_value_error():
    with pytest.raises(ValueError):
        slice_markdown(text("Hello"), 3, 1)
