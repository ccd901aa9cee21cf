"""
Tests for the read-only Row view and the MISSING sentinel.
"""
import datetime
import pickle

import pytest
from wpstore.row import Row
from wpstore.types import MISSING


def test_property_trims_whitespace():
    """Values are exposed as text with surrounding whitespace removed"""
    row = Row({'post_title': '  Hello  \n', 'post_content': '\tbody '})

    assert row.property('post_title') == 'Hello'
    assert row.property('post_content') == 'body'


def test_property_renders_numbers_and_dates_as_text():
    """Numbers and timestamps are not type-converted"""
    row = Row({
        'ID': 42,
        'post_date': datetime.datetime(2024, 1, 1, 10, 0, 5),
    })

    assert row.property('ID') == '42'
    assert row.property('post_date') == '2024-01-01 10:00:05'


def test_absent_column_is_distinct_from_empty_string():
    """An absent column reads as MISSING, an empty one as ''"""
    row = Row({'post_excerpt': ''})

    assert row.property('post_excerpt') == ''
    assert row.property('post_excerpt') is not MISSING
    assert row.property('no_such_column') is MISSING
    assert MISSING != ''
    assert MISSING != 0
    assert not MISSING


def test_null_column_reads_as_missing():
    row = Row({'post_parent': None})

    assert row.property('post_parent') is MISSING
    assert 'post_parent' not in row


def test_empty_row_placeholder():
    """A row built without data answers MISSING for everything"""
    row = Row()

    assert len(row) == 0
    assert row.property('ID') is MISSING
    assert row.to_dict() == {}


def test_row_is_read_only():
    row = Row({'ID': 1})

    with pytest.raises(AttributeError):
        row.extra = 1
    with pytest.raises(TypeError):
        row['ID'] = 2


def test_row_does_not_track_source_mapping():
    """Changing the source dict after construction does not change the row"""
    source = {'ID': 1}
    row = Row(source)
    source['ID'] = 2

    assert row.property('ID') == '1'


def test_row_equality_and_hash():
    first = Row({'ID': 1, 'post_title': 'x'})
    second = Row({'post_title': 'x', 'ID': 1})

    assert first == second
    assert hash(first) == hash(second)
    assert first != Row({'ID': 2, 'post_title': 'x'})


def test_missing_is_a_singleton():
    assert pickle.loads(pickle.dumps(MISSING)) is MISSING
    assert repr(MISSING) == 'MISSING'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
