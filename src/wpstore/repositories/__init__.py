from wpstore.repositories.base import Repository
from wpstore.repositories.comment import CommentFields, CommentRepository
from wpstore.repositories.post import DEFAULT_POST_TYPE, PostFields
from wpstore.repositories.post import PostRepository
from wpstore.repositories.taxonomy import DEFAULT_TAXONOMY, TaxonomyRepository

__all__ = [
    'Repository',
    'PostRepository',
    'PostFields',
    'CommentRepository',
    'CommentFields',
    'TaxonomyRepository',
    'DEFAULT_POST_TYPE',
    'DEFAULT_TAXONOMY',
]
