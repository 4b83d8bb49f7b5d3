"""Unit tests for domain entities and enums."""

import pytest

from s1ocn.domain.entities import SearchCriteria
from s1ocn.domain.enums import NO_DATA
from s1ocn.domain.errors import InvalidAttributeNameError, InvalidSearchCriteriaError, S1OCNError


def test_search_criteria_defaults():
    """Test default search criteria."""
    criteria = SearchCriteria()

    assert criteria.max_results == 20
    assert criteria.search_polygon is None
    assert criteria.datetime_start is None
    assert criteria.datetime_end is None
    assert criteria.attribute_filters == {}


@pytest.mark.parametrize("max_results", [0, -1])
def test_search_criteria_rejects_non_positive(max_results):
    """Test max_results must be positive."""
    with pytest.raises(InvalidSearchCriteriaError, match="positive"):
        SearchCriteria(max_results=max_results)


def test_no_data_is_falsy():
    """Test the empty result sentinel."""
    assert not NO_DATA
    assert repr(NO_DATA) == "NO_DATA"


def test_invalid_attribute_error():
    """Test invalid attribute errors carry the name."""
    error = InvalidAttributeNameError("fooBar")

    assert isinstance(error, S1OCNError)
    assert error.attribute_name == "fooBar"
    assert str(error) == "fooBar is not a valid attribute"
