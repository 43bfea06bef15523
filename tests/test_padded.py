from civimember.utils.padded import VALUE_SEPARATOR, explode_padded, implode_padded


def test_explode_padded_splits_on_separator():
    assert explode_padded("\x012\x015\x01") == ["2", "5"]


def test_explode_padded_none_and_empty():
    assert explode_padded(None) is None
    assert explode_padded("") == []


def test_explode_padded_passes_lists_through():
    assert explode_padded([1, 2]) == [1, 2]


def test_explode_padded_single_unpadded_value():
    assert explode_padded("7") == ["7"]


def test_explode_padded_comma_fallback():
    assert explode_padded("1, 2") == ["1", "2"]


def test_implode_padded():
    assert implode_padded([2, 5]) == f"{VALUE_SEPARATOR}2{VALUE_SEPARATOR}5{VALUE_SEPARATOR}"
    assert implode_padded([]) == ""
    assert implode_padded(None) is None
