"""Post repository."""
import datetime
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from wpstore.repositories.base import Repository
from wpstore.results import Post
from wpstore.types import format_timestamp, gmt_timestamp

__all__ = ['PostFields', 'PostRepository', 'DEFAULT_POST_TYPE']

logger = logging.getLogger(__name__)

DEFAULT_POST_TYPE = 'post'

Timestamp = datetime.datetime | datetime.date | str


@dataclass(frozen=True)
class PostFields:
    """Values for a new post.

    user_id:        The unique id of the user who created this post
    date:           The date that the post was created
    body:           The main body content of the post
    title:          The title of the post
    excerpt:        The teaser or excerpt of the post, if it exists
    status:         The post's status, such as "publish" or "draft"
    slug:           A url-friendly version of the post title
    modified:       The date that the post was last modified on
    guid:           Globally unique identifier for the post, as a URL
    comment_status: Whether the post can still be commented on
    parent:         Id of a parent post, such as when this post is a
                    revision of another one
    type:           The type of post being saved; other valid values
                    depend on the installation
    """
    user_id: int
    date: Timestamp
    body: str
    title: str
    excerpt: str
    status: str
    slug: str
    modified: Timestamp
    guid: str
    comment_status: bool = False
    parent: int | None = None
    type: str | None = None

    @classmethod
    def coerce(cls, values: 'PostFields | Mapping[str, Any]') -> 'PostFields':
        if isinstance(values, cls):
            return values
        return cls(**values)


_INSERT_COLUMNS = [
    ('post_author', 'user_id'),
    ('post_date', 'date'),
    ('post_date_gmt', 'date_gmt'),
    ('post_content', 'content'),
    ('post_title', 'title'),
    ('post_excerpt', 'excerpt'),
    ('post_status', 'status'),
    ('comment_status', 'comment_status'),
    ('post_name', 'slug'),
    ('post_modified', 'modified'),
    ('post_modified_gmt', 'modified_gmt'),
    ('post_parent', 'parent'),
    ('guid', 'guid'),
    ('post_type', 'type'),
    ]


class PostRepository(Repository[Post]):
    """Reads and writes rows of the posts table.
    """

    result_class = Post
    table = 'posts'
    primary_key = 'ID'
    date_column = 'post_date'

    def post_with_id(self, post_id: int) -> Post | None:
        """Returns the post with the given id, or None if none exists."""
        return self.find_by_id(post_id)

    def posts_with_title_status_and_date(self, title: str, status: str,
                                         date: Timestamp) -> list[Post]:
        """Return posts matching a title and status created at `date`.

        Results are ordered from least to most recent.
        """
        def build(cn):
            return f"""
SELECT
    p.*
FROM
    {cn.table_name(self.table)} AS p
WHERE
    p.{self.q('post_title')} = :title AND
    p.{self.q('post_status')} = :status AND
    p.{self.q('post_date')} = :date
ORDER BY
    p.{self.q(self.date_column)}"""

        statement = self._statement('posts_with_title_status_and_date', build)
        return self._fetch_all(statement, title=title, status=status,
                               date=format_timestamp(date))

    def posts_with_title_status_and_type(self, title: str, status: str = 'publish',
                                         type: str = DEFAULT_POST_TYPE) -> list[Post]:
        """Return posts matching a title, status and post type.

        Results are ordered from least to most recent.
        """
        def build(cn):
            return f"""
SELECT
    p.*
FROM
    {cn.table_name(self.table)} AS p
WHERE
    p.{self.q('post_title')} = :title AND
    p.{self.q('post_status')} = :status AND
    p.{self.q('post_type')} = :type
ORDER BY
    p.{self.q(self.date_column)}"""

        statement = self._statement('posts_with_title_status_and_type', build)
        return self._fetch_all(statement, title=title, status=status, type=type)

    def all(self) -> list[Post]:
        """Return every post, ordered by id.

        Not paginated; only suitable for small installations.
        """
        def build(cn):
            return f"""
SELECT
    *
FROM
    {cn.table_name(self.table)}
ORDER BY
    {self.q(self.primary_key)} ASC"""

        statement = self._statement('all', build)
        return self._fetch_all(statement)

    def save(self, values: PostFields | Mapping[str, Any]) -> Post | None:
        """Save a new post and return it as stored, or None on failure.
        """
        fields = PostFields.coerce(values)
        params = {
            'user_id': fields.user_id,
            'date': format_timestamp(fields.date),
            'date_gmt': gmt_timestamp(fields.date),
            'content': fields.body,
            'title': fields.title,
            'excerpt': fields.excerpt,
            'status': fields.status,
            'comment_status': 'open' if fields.comment_status else 'closed',
            'slug': fields.slug,
            'modified': format_timestamp(fields.modified),
            'modified_gmt': gmt_timestamp(fields.modified),
            'parent': fields.parent or 0,
            'guid': fields.guid,
            'type': fields.type or DEFAULT_POST_TYPE,
            }
        return self._insert('save', _INSERT_COLUMNS, params)

    def update_comment_counts(self) -> None:
        """Recompute the denormalized comment count of every post.

        A full-table repair pass; run it occasionally, not per request.
        """
        cn = self.connector
        posts = cn.table_name(self.table)
        self.handle().exec(f"""
UPDATE
    {posts}
SET
    {self.q('comment_count')} = (
        SELECT
            COUNT(*)
        FROM
            {cn.table_name('comments')} AS c
        WHERE
            c.{self.q('comment_post_ID')} = {posts}.{self.q(self.primary_key)}
    )""")
        logger.debug(f'Recomputed comment counts on {posts}')

    def get(self, id: int) -> Post | None:
        return self.post_with_id(id)

    def delete(self, id: int) -> bool:
        """Delete a post by id.

        True means the statement ran without a driver error, not that a row
        was removed.
        """
        return self._delete(id)
