"""
PostRepository against an in-memory SQLite database.
"""
import datetime

import pytest
from wpstore import PostFields
from wpstore.exceptions import QueryError
from wpstore.results import Post
from wpstore.types import MISSING, gmt_timestamp


def _post(title, status='publish', type='post', date=None, **overrides):
    values = {
        'user_id': 1,
        'date': date or datetime.datetime(2024, 1, 1, 12, 0, 0),
        'body': 'Body',
        'title': title,
        'excerpt': '',
        'status': status,
        'slug': title.lower(),
        'modified': datetime.datetime(2024, 1, 2, 12, 0, 0),
        'guid': f'https://example.com/{title.lower()}',
        'type': type,
    }
    values.update(overrides)
    return PostFields(**values)


def test_save_then_get_round_trip(posts, post_values):
    saved = posts.save(post_values)

    assert isinstance(saved, Post)
    fetched = posts.get(int(saved.id()))
    assert fetched == saved
    assert fetched.author() == '3'
    assert fetched.title() == 'Hello'
    assert fetched.content() == '<p>Hello world</p>'
    assert fetched.excerpt() == ''
    assert fetched.status() == 'publish'
    assert fetched.slug() == 'hello'
    assert fetched.guid() == 'https://example.com/?p=hello'
    assert fetched.date() == '2024-03-01 09:30:15'
    assert fetched.date_gmt() == '2024-03-01 14:30:15'
    assert fetched.modified() == '2024-03-02 23:00:00'
    assert fetched.modified_gmt() == '2024-03-03 04:00:00'
    assert fetched.comments_open() is True
    assert fetched.parent() == '0'
    assert fetched.type() == 'post'
    assert fetched.comment_count() == '0'


def test_save_defaults(posts):
    saved = posts.save(_post('Defaults', type=None))

    assert saved.type() == 'post'
    assert saved.comment_status() == 'closed'
    assert saved.parent() == '0'
    assert saved.date_gmt() == gmt_timestamp(datetime.datetime(2024, 1, 1, 12, 0, 0))


def test_save_with_parent(posts):
    parent = posts.save(_post('Parent'))
    child = posts.save(_post('Revision', type='revision', parent=int(parent.id())))

    assert child.parent() == parent.id()
    assert child.type() == 'revision'


def test_get_unknown_id_is_none(posts):
    assert posts.get(999) is None
    assert posts.post_with_id(999) is None


def test_delete_then_get_is_none(posts):
    saved = posts.save(_post('Doomed'))
    post_id = int(saved.id())

    assert posts.get(post_id) is not None
    assert posts.delete(post_id) is True
    assert posts.get(post_id) is None


def test_delete_of_unknown_id_still_reports_ran(posts):
    assert posts.delete(12345) is True


def test_title_status_and_type(posts):
    """Posts that differ only by type are told apart"""
    page = posts.save(_post('Same', type='page'))
    article = posts.save(_post('Same', type='post'))

    pages = posts.posts_with_title_status_and_type('Same', 'publish', 'page')
    articles = posts.posts_with_title_status_and_type('Same', 'publish', 'post')

    assert pages == [page]
    assert articles == [article]
    assert posts.posts_with_title_status_and_type('Same') == [article]
    assert posts.posts_with_title_status_and_type('Same', 'draft') == []


def test_title_status_and_date_orders_by_date(posts):
    when = datetime.datetime(2024, 6, 1, 8, 0, 0, 700000)
    posts.save(_post('Dated', date=when))
    posts.save(_post('Dated', date=when, type='page'))
    posts.save(_post('Dated', date=when + datetime.timedelta(seconds=1)))

    found = posts.posts_with_title_status_and_date('Dated', 'publish', when)

    assert len(found) == 2
    assert {p.type() for p in found} == {'post', 'page'}
    assert all(p.date() == '2024-06-01 08:00:00' for p in found)
    assert posts.posts_with_title_status_and_date('Dated', 'publish', '2024-06-01 08:00:01')[0].type() == 'post'
    assert posts.posts_with_title_status_and_date('Nope', 'publish', when) == []


def test_all_orders_by_id(posts):
    assert posts.all() == []

    ids = [int(posts.save(_post(f'P{n}')).id()) for n in range(3)]
    posts.delete(ids[1])

    assert [int(p.id()) for p in posts.all()] == [ids[0], ids[2]]


def test_update_comment_counts(posts, comments, comment_values):
    first = posts.save(_post('First'))
    second = posts.save(_post('Second'))
    for _ in range(2):
        comments.save(comment_values | {'post_id': int(first.id())})

    posts.update_comment_counts()

    assert posts.get(int(first.id())).comment_count() == '2'
    assert posts.get(int(second.id())).comment_count() == '0'


def test_statements_compile_once_per_shape(posts, sqlite_connector, mocker):
    spy = mocker.spy(sqlite_connector.handle(), 'prepare')

    posts.posts_with_title_status_and_type('A')
    posts.posts_with_title_status_and_type('B', 'draft', 'page')

    assert spy.call_count == 1


def test_save_failure_returns_none(posts, sqlite_connector):
    sqlite_connector.handle().exec(f'DROP TABLE {sqlite_connector.table_name("posts")}')

    assert posts.save(_post('Lost')) is None


def test_result_carries_connector_context(posts, sqlite_connector):
    saved = posts.save(_post('Context'))

    assert saved.context is sqlite_connector
    assert saved.property('no_such_column') is MISSING


def test_failed_comment_count_update_leaves_connection_usable(posts, sqlite_connector):
    saved = posts.save(_post('Survivor'))
    sqlite_connector.handle().exec(f'DROP TABLE {sqlite_connector.table_name("comments")}')

    with pytest.raises(QueryError):
        posts.update_comment_counts()

    assert posts.get(int(saved.id())) == saved
    assert posts.save(_post('After')) is not None
