import datetime

import wpstore
from tests.fixtures.schema import SQLITE_SCHEMA, create_schema


def test_site_end_to_end(tmp_path):
    """Posts and comments through one Site, with a custom table prefix"""
    database = tmp_path / 'blog.db'

    with wpstore.open_site(drivername='sqlite', database=str(database),
                           table_prefix='blog_') as site:
        create_schema(site.connector, SQLITE_SCHEMA)

        assert site.posts is site.posts
        assert site.comments.connector is site.connector

        post = site.posts.save({
            'user_id': 1,
            'date': '2024-01-01 09:00:00',
            'body': 'Body',
            'title': 'Hello',
            'excerpt': '',
            'status': 'publish',
            'slug': 'hello',
            'modified': '2024-01-01 09:00:00',
            'guid': 'https://example.com/hello',
            'comment_status': True,
        })
        site.comments.save({
            'post_id': int(post.id()),
            'author': 'Ann',
            'email': 'a@x.com',
            'url': '',
            'ip': '1.2.3.4',
            'date': datetime.datetime(2024, 1, 1, 10, 0, 0),
            'comment': 'Hi',
            'approved': True,
        })
        site.posts.update_comment_counts()

    # committed writes are visible from a fresh connection
    with wpstore.open_site(drivername='sqlite', database=str(database),
                           table_prefix='blog_') as site:
        post, = site.posts.all()
        assert post.title() == 'Hello'
        assert post.comment_count() == '1'
        comment, = site.comments.comments_for_post(int(post.id()))
        assert comment.approved() is True

        frame = wpstore.to_frame(site.posts.all(), columns=['ID', 'post_title'])
        assert frame['post_title'].tolist() == ['Hello']
