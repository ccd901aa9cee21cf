"""Taxonomy term repository.

Terms live in three tables: `terms` holds names and slugs, `term_taxonomy`
places a term in a taxonomy ('category', 'post_tag', ...), and
`term_relationships` attaches taxonomy entries to posts. Results carry the
columns of the first two.
"""
import logging

from wpstore.repositories.base import Repository
from wpstore.results import Taxonomy

__all__ = ['TaxonomyRepository', 'DEFAULT_TAXONOMY']

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY = 'category'


class TaxonomyRepository(Repository[Taxonomy]):
    """Read-only access to taxonomy terms.
    """

    result_class = Taxonomy
    table = 'terms'
    primary_key = 'term_id'

    def _select_terms(self, cn) -> str:
        return f"""
SELECT
    t.*,
    tt.{self.q('taxonomy')},
    tt.{self.q('description')},
    tt.{self.q('parent')},
    tt.{self.q('count')}
FROM
    {cn.table_name('terms')} AS t
    LEFT JOIN {cn.table_name('term_taxonomy')} AS tt
        ON tt.{self.q('term_id')} = t.{self.q('term_id')}"""

    def _by_id_sql(self, cn) -> str:
        return f"""{self._select_terms(cn)}
WHERE
    t.{self.q(self.primary_key)} = :id
LIMIT
    1"""

    def term_with_id(self, term_id: int) -> Taxonomy | None:
        """Return the term with the given id, or None."""
        return self.find_by_id(term_id)

    def term_with_slug(self, slug: str, taxonomy: str = DEFAULT_TAXONOMY) -> Taxonomy | None:
        """Return the term with a slug in a taxonomy, or None."""
        def build(cn):
            return f"""{self._select_terms(cn)}
WHERE
    t.{self.q('slug')} = :slug AND
    tt.{self.q('taxonomy')} = :taxonomy
LIMIT
    1"""

        statement = self._statement('term_with_slug', build)
        return self._fetch_one(statement, slug=slug, taxonomy=taxonomy)

    def terms_for_post(self, post_id: int, taxonomy: str = DEFAULT_TAXONOMY) -> list[Taxonomy]:
        """Return the terms of one taxonomy attached to a post, by name."""
        def build(cn):
            return f"""{self._select_terms(cn)}
    INNER JOIN {cn.table_name('term_relationships')} AS tr
        ON tr.{self.q('term_taxonomy_id')} = tt.{self.q('term_taxonomy_id')}
WHERE
    tr.{self.q('object_id')} = :post_id AND
    tt.{self.q('taxonomy')} = :taxonomy
ORDER BY
    t.{self.q('name')}"""

        statement = self._statement('terms_for_post', build)
        return self._fetch_all(statement, post_id=int(post_id), taxonomy=taxonomy)

    def get(self, id: int) -> Taxonomy | None:
        return self.term_with_id(id)
