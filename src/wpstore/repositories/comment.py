"""Comment repository."""
import datetime
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from wpstore.repositories.base import Repository
from wpstore.results import Comment
from wpstore.types import format_timestamp, gmt_timestamp

__all__ = ['CommentFields', 'CommentRepository']

logger = logging.getLogger(__name__)

Timestamp = datetime.datetime | datetime.date | str


@dataclass(frozen=True)
class CommentFields:
    """Values for a new comment.

    post_id:  The unique id of the post the comment is for
    author:   The name of the person leaving the comment
    email:    The email of the person leaving the comment
    url:      A web url provided with the comment
    ip:       The IP address the comment was left from
    date:     The time the comment was left
    comment:  The text of the comment
    approved: Whether the comment was approved for display
    """
    post_id: int
    author: str
    email: str
    url: str
    ip: str
    date: Timestamp
    comment: str
    approved: bool

    @classmethod
    def coerce(cls, values: 'CommentFields | Mapping[str, Any]') -> 'CommentFields':
        if isinstance(values, cls):
            return values
        return cls(**values)


_INSERT_COLUMNS = [
    ('comment_post_ID', 'post_id'),
    ('comment_author', 'author'),
    ('comment_author_email', 'email'),
    ('comment_author_url', 'url'),
    ('comment_author_IP', 'ip'),
    ('comment_date', 'date'),
    ('comment_date_gmt', 'date_gmt'),
    ('comment_content', 'content'),
    ('comment_approved', 'approved'),
    ]


class CommentRepository(Repository[Comment]):
    """Reads and writes rows of the comments table.
    """

    result_class = Comment
    table = 'comments'
    primary_key = 'comment_ID'
    date_column = 'comment_date'

    def comment_with_id(self, comment_id: int) -> Comment | None:
        """Returns the comment with the given id, or None if none exists."""
        return self.find_by_id(comment_id)

    def comments_for_post(self, post_id: int) -> list[Comment]:
        """Return all comments for a post, oldest first.
        """
        def build(cn):
            return f"""
SELECT
    c.*
FROM
    {cn.table_name(self.table)} AS c
WHERE
    c.{self.q('comment_post_ID')} = :post_id
ORDER BY
    c.{self.q(self.date_column)}"""

        statement = self._statement('comments_for_post', build)
        return self._fetch_all(statement, post_id=int(post_id))

    def comments_by_author_for_post_at_time(self, author_name: str, post_id: int,
                                            time: Timestamp) -> list[Comment]:
        """Return comments left by an author on a post at an exact time.

        Meant for checking whether a comment already exists when its unique
        id is not known. `time` is matched to the second.
        """
        def build(cn):
            return f"""
SELECT
    c.*
FROM
    {cn.table_name(self.table)} AS c
WHERE
    c.{self.q('comment_post_ID')} = :post_id AND
    c.{self.q('comment_author')} = :author AND
    c.{self.q('comment_date')} = :date
ORDER BY
    c.{self.q(self.date_column)}"""

        statement = self._statement('comments_by_author_for_post_at_time', build)
        return self._fetch_all(statement, post_id=int(post_id), author=author_name,
                               date=format_timestamp(time))

    def save(self, values: CommentFields | Mapping[str, Any]) -> Comment | None:
        """Save a new comment and return it as stored, or None on failure.
        """
        fields = CommentFields.coerce(values)
        params = {
            'post_id': fields.post_id,
            'author': fields.author,
            'email': fields.email,
            'url': fields.url,
            'ip': fields.ip,
            'date': format_timestamp(fields.date),
            'date_gmt': gmt_timestamp(fields.date),
            'content': fields.comment,
            'approved': '1' if fields.approved else '0',
            }
        return self._insert('save', _INSERT_COLUMNS, params)

    def get(self, id: int) -> Comment | None:
        return self.comment_with_id(id)

    def delete(self, id: int) -> bool:
        """Delete a comment by id.

        True means the statement ran without a driver error, not that a row
        was removed.
        """
        return self._delete(id)
