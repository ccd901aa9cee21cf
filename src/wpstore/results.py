"""
Typed result objects built from fetched rows.

Each result wraps exactly one Row and exposes domain-named accessors over the
WordPress column names. Accessors never touch the database; everything is
read from the row that was fetched. Absent columns read as MISSING.
"""
from collections.abc import Mapping
from typing import Any

from wpstore.row import Row
from wpstore.types import MISSING

__all__ = ['MISSING', 'Result', 'Post', 'Comment', 'Taxonomy']


class Result:
    """Base for typed results.

    ``context`` is whatever shared collaborator created the result (the
    connector, for results coming out of a repository). Results only keep a
    reference to it; they never call back into a repository.
    """

    __slots__ = ('_context', '_row')

    def __init__(self, context: Any = None, row: Row | Mapping[str, Any] | None = None) -> None:
        self._context = context
        self._row = row if isinstance(row, Row) else Row(row)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._row == other._row

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._row))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.row.to_dict()!r})'

    @property
    def row(self) -> Row:
        """The underlying fetched row."""
        return self._row

    @property
    def context(self) -> Any:
        return self._context

    def property(self, name: str) -> str:
        """Return the trimmed value of a column, or MISSING if absent."""
        return self._row.property(name)


class Post(Result):
    """A row from the posts table.
    """

    __slots__ = ()

    def id(self) -> str:
        return self.property('ID')

    def author(self) -> str:
        """Id of the user who wrote the post."""
        return self.property('post_author')

    def date(self) -> str:
        return self.property('post_date')

    def date_gmt(self) -> str:
        return self.property('post_date_gmt')

    def content(self) -> str:
        return self.property('post_content')

    def title(self) -> str:
        return self.property('post_title')

    def excerpt(self) -> str:
        return self.property('post_excerpt')

    def status(self) -> str:
        """Publication status, such as 'publish' or 'draft'."""
        return self.property('post_status')

    def comment_status(self) -> str:
        """Raw comment status column, 'open' or 'closed'."""
        return self.property('comment_status')

    def comments_open(self) -> bool:
        return self.comment_status() == 'open'

    def slug(self) -> str:
        return self.property('post_name')

    def modified(self) -> str:
        return self.property('post_modified')

    def modified_gmt(self) -> str:
        return self.property('post_modified_gmt')

    def parent(self) -> str:
        return self.property('post_parent')

    def guid(self) -> str:
        return self.property('guid')

    def type(self) -> str:
        return self.property('post_type')

    def comment_count(self) -> str:
        """Denormalized comment count, as last recomputed."""
        return self.property('comment_count')


class Comment(Result):
    """A row from the comments table.
    """

    __slots__ = ()

    def id(self) -> str:
        return self.property('comment_ID')

    def post_id(self) -> str:
        return self.property('comment_post_ID')

    def author(self) -> str:
        return self.property('comment_author')

    def email(self) -> str:
        return self.property('comment_author_email')

    def url(self) -> str:
        return self.property('comment_author_url')

    def ip(self) -> str:
        return self.property('comment_author_IP')

    def date(self) -> str:
        return self.property('comment_date')

    def date_gmt(self) -> str:
        return self.property('comment_date_gmt')

    def content(self) -> str:
        return self.property('comment_content')

    def approved(self) -> bool:
        """Whether the comment was approved for display.

        Only the stored value '1' counts as approved; spam and trash markers
        read as not approved.
        """
        return self.property('comment_approved') == '1'


class Taxonomy(Result):
    """A taxonomy term, joined with its term_taxonomy row when available.
    """

    __slots__ = ()

    def id(self) -> str:
        return self.property('term_id')

    def name(self) -> str:
        return self.property('name')

    def slug(self) -> str:
        return self.property('slug')

    def taxonomy(self) -> str:
        """Taxonomy the term belongs to, such as 'category' or 'post_tag'."""
        return self.property('taxonomy')

    def description(self) -> str:
        return self.property('description')

    def parent(self) -> str:
        return self.property('parent')

    def count(self) -> str:
        return self.property('count')

