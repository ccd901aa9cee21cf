"""
Tests for the typed result accessors.
"""
from wpstore.results import Comment, Post, Taxonomy
from wpstore.row import Row
from wpstore.types import MISSING


def test_post_accessors_map_to_columns():
    post = Post(None, {
        'ID': 12,
        'post_author': 3,
        'post_title': ' Hello ',
        'post_status': 'draft',
        'post_name': 'hello',
        'post_type': 'page',
        'comment_status': 'open',
        'post_parent': 0,
        'comment_count': 4,
    })

    assert post.id() == '12'
    assert post.author() == '3'
    assert post.title() == 'Hello'
    assert post.status() == 'draft'
    assert post.slug() == 'hello'
    assert post.type() == 'page'
    assert post.parent() == '0'
    assert post.comment_count() == '4'
    assert post.comments_open() is True
    assert post.excerpt() is MISSING


def test_comment_approved_flag():
    assert Comment(None, {'comment_approved': '1'}).approved() is True
    assert Comment(None, {'comment_approved': '0'}).approved() is False
    assert Comment(None, {'comment_approved': 'spam'}).approved() is False
    assert Comment(None, {}).approved() is False


def test_comment_accessors_map_to_columns():
    comment = Comment(None, {
        'comment_ID': 5,
        'comment_post_ID': 7,
        'comment_author': 'Ann',
        'comment_author_email': 'a@x.com',
        'comment_author_url': '',
        'comment_author_IP': '1.2.3.4',
        'comment_date': '2024-01-01 10:00:00',
        'comment_content': 'Hi',
    })

    assert comment.id() == '5'
    assert comment.post_id() == '7'
    assert comment.author() == 'Ann'
    assert comment.email() == 'a@x.com'
    assert comment.url() == ''
    assert comment.ip() == '1.2.3.4'
    assert comment.date() == '2024-01-01 10:00:00'
    assert comment.date_gmt() is MISSING
    assert comment.content() == 'Hi'


def test_taxonomy_accessors():
    term = Taxonomy(None, {'term_id': 2, 'name': 'Cooking ', 'slug': 'cooking'})

    assert term.id() == '2'
    assert term.name() == 'Cooking'
    assert term.slug() == 'cooking'
    assert term.taxonomy() is MISSING


def test_result_without_row_reads_missing():
    post = Post(object())

    assert post.id() is MISSING
    assert post.title() is MISSING


def test_equality_follows_the_row():
    """Results of the same kind over equal rows are equal, whatever the context"""
    row = Row({'ID': 1})

    assert Post('a', row) == Post('b', {'ID': 1})
    assert hash(Post('a', row)) == hash(Post('b', row))
    assert Post(None, row) != Comment(None, row)
    assert Post(None, row) != Post(None, {'ID': 2})


def test_result_keeps_its_context():
    context = object()
    post = Post(context, {'ID': 1})

    assert post.context is context
    assert post.row == Row({'ID': 1})


if __name__ == '__main__':
    __import__('pytest').main([__file__])
