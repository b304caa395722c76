"""
Article Operations for Veiligheidsbladen Beheer.

Catalogue article management operations.
Pure functions with dependency injection - no global state.

- load_articles() - All articles, newest first
- create_article() - Validate and insert one article
- filter_articles() - Free-text search over the loaded list
- get_existing_unique_ids() - Which IDs already exist
"""

import logging
from typing import Any, Dict, Iterable, List, Set

from data.interface import DatabaseInterface
from domain.exceptions import DatabaseError, ValidationError
from domain.models import Article
from domain.rules import matches_search
from domain.validators import (
    validate_ean,
    validate_naam,
    validate_reference,
    validate_unieke_id,
)

logger = logging.getLogger(__name__)


def load_articles(db: DatabaseInterface) -> List[Article]:
    """
    Load all articles, newest first.

    Args:
        db: Database instance (injected)

    Returns:
        List of Article

    Raises:
        DatabaseError: If query fails (code/details/hint preserved)
    """
    try:
        rows = db.list_articles(order_by="created_at", descending=True)
    except DatabaseError:
        logger.error("Loading articles failed")
        raise
    except Exception as e:
        logger.exception("Error loading articles")
        raise DatabaseError(f"Fout bij laden artikelen: {e}")

    articles = [Article.from_row(row) for row in rows]
    logger.info(f"Loaded {len(articles)} articles")
    return articles


def validate_article_form(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate article form input.

    Args:
        form: Dict with naam, unieke_id and optional referentie_rubix,
              referentie_fabrikant, ean

    Returns:
        Cleaned insert payload (empty optional fields become None)

    Raises:
        ValidationError: If a field is invalid
    """
    return {
        "unieke_id": validate_unieke_id(form.get("unieke_id")),
        "naam": validate_naam(form.get("naam")),
        "referentie_rubix": validate_reference(form.get("referentie_rubix"), "Referentie Rubix"),
        "referentie_fabrikant": validate_reference(
            form.get("referentie_fabrikant"), "Referentie fabrikant"
        ),
        "ean": validate_ean(form.get("ean")),
    }


def create_article(db: DatabaseInterface, form: Dict[str, Any]) -> Article:
    """
    Create a new article.

    Args:
        db: Database instance (injected)
        form: Article form input (see validate_article_form)

    Returns:
        Created Article (with backend-assigned id and timestamps)

    Raises:
        ValidationError: If input is invalid
        DatabaseError: If insert fails (e.g. duplicate unieke_id)

    Example:
        >>> article = create_article(db, {"naam": "Veiligheidshelm", "unieke_id": "VH-001"})
        >>> article.unieke_id
        'VH-001'
    """
    try:
        payload = validate_article_form(form)
    except ValidationError as e:
        logger.warning(f"Invalid article input: {e}")
        raise

    try:
        row = db.insert_article(payload)
    except DatabaseError:
        logger.error(f"Insert of article {payload['unieke_id']} failed")
        raise
    except Exception as e:
        logger.exception(f"Error creating article {payload['unieke_id']}")
        raise DatabaseError(
            f"Fout bij toevoegen artikel: {e}",
            details={"unieke_id": payload["unieke_id"]},
        )

    logger.info(f"Created article {payload['unieke_id']}")
    return Article.from_row(row)


def filter_articles(articles: Iterable[Article], term: str) -> List[Article]:
    """
    Filter articles by search term.

    Case-insensitive substring match on naam, unieke_id, referentie_rubix,
    referentie_fabrikant and ean. Empty term returns all articles.
    """
    return [article for article in articles if matches_search(article, term)]


def get_existing_unique_ids(db: DatabaseInterface, unieke_ids: Iterable[str]) -> Set[str]:
    """
    Look up which unique IDs already exist.

    Raises:
        DatabaseError: If query fails
    """
    ids = [i for i in unieke_ids if i]
    if not ids:
        return set()

    try:
        existing = db.find_existing_unique_ids(ids)
    except DatabaseError:
        raise
    except Exception as e:
        logger.exception("Error checking unique IDs")
        raise DatabaseError(
            f"Fout bij controleren artikelen: {e}",
            details={"count": len(ids)},
        )

    logger.debug(f"{len(existing)} of {len(set(ids))} IDs already exist")
    return set(existing)


def get_article_count_label(shown: int, total: int) -> str:
    """Count display for the article list, e.g. '3 van 10 artikelen'."""
    return f"{shown} van {total} artikelen"
