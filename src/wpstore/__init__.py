"""
Typed data access for WordPress-style post, comment and taxonomy tables.

Open a Site (or a bare Connector) and use its repositories:

    with wpstore.open_site(drivername='sqlite', database='blog.db') as site:
        post = site.posts.get(1)
        comments = site.comments.comments_for_post(1)

Finders for a single row return None when nothing matches; finders for a
set of rows return a (possibly empty) list ordered by date.
"""
__version__ = '0.1.0'

from wpstore.connection import Connector, StorageHandle, Statement, connect
from wpstore.exceptions import ConnectionFailure, DatabaseError, QueryError
from wpstore.frames import to_frame
from wpstore.options import DatabaseOptions
from wpstore.repositories import CommentFields, CommentRepository, PostFields
from wpstore.repositories import PostRepository, Repository, TaxonomyRepository
from wpstore.results import Comment, Post, Result, Taxonomy
from wpstore.row import Row
from wpstore.site import Site, open_site
from wpstore.types import MISSING, format_timestamp, gmt_timestamp

__all__ = [
    'connect',
    'open_site',
    'Connector',
    'StorageHandle',
    'Statement',
    'DatabaseOptions',
    'Site',
    'Repository',
    'PostRepository',
    'PostFields',
    'CommentRepository',
    'CommentFields',
    'TaxonomyRepository',
    'Row',
    'Result',
    'Post',
    'Comment',
    'Taxonomy',
    'MISSING',
    'format_timestamp',
    'gmt_timestamp',
    'to_frame',
    'DatabaseError',
    'ConnectionFailure',
    'QueryError',
]
