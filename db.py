import logging
import threading
from typing import Iterable, List, Optional

from fastapi import Request

from models import Article, seed_articles

logger = logging.getLogger(__name__)


class ArticleStore:
    """Ordered in-memory collection of articles guarded by a single lock.

    Lookups are linear scans on ``id``; the first match wins. Nothing here
    enforces unique ids.
    """

    def __init__(self, articles: Optional[Iterable[Article]] = None):
        if articles is None:
            self._articles = seed_articles()
        else:
            self._articles = [a.copy() for a in articles]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._articles)

    def _index(self, article_id: str) -> Optional[int]:
        for i, article in enumerate(self._articles):
            if article.id == article_id:
                return i
        return None

    def all(self) -> List[Article]:
        with self._lock:
            return [a.copy() for a in self._articles]

    def get(self, article_id: str) -> Optional[Article]:
        with self._lock:
            i = self._index(article_id)
            if i is None:
                return None
            return self._articles[i].copy()

    def append(self, article: Article) -> Article:
        with self._lock:
            self._articles.append(article.copy())
            logger.info("article appended id=%r total=%s", article.id, len(self._articles))
        return article

    def update(
        self, article_id: str, title: str, description: str, content: str
    ) -> Optional[Article]:
        with self._lock:
            i = self._index(article_id)
            if i is None:
                return None
            article = self._articles[i]
            article.title = title
            article.description = description
            article.content = content
            logger.info("article updated id=%r", article_id)
            return article.copy()

    def delete(self, article_id: str) -> Optional[Article]:
        with self._lock:
            i = self._index(article_id)
            if i is None:
                return None
            removed = self._articles.pop(i)
            logger.info("article deleted id=%r total=%s", article_id, len(self._articles))
            return removed


def get_store(request: Request) -> ArticleStore:
    return request.app.state.store
