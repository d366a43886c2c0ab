"""Document store for generated and deployed pages.

Every operation is a single atomic step under one re-entrant lock, and every
read hands out a copy.  A render racing a delete therefore sees either the
whole page or nothing.  The store enforces slug uniqueness itself: allocation
only makes collisions unlikely, :meth:`PageStore.insert` makes them
impossible.
"""

import json
import logging
import os
import threading
from collections import Counter
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pageforge import config
from pageforge.errors import ConflictError, DuplicateSlugError
from pageforge.models.page import DeployedPage, GeneratedPage, utcnow

logger = logging.getLogger(__name__)

# Fields list_all() may sort on; a leading "-" means descending.
_SORT_FIELDS = {"created_at", "updated_at", "slug", "title"}


class PageStore:
    """In-memory page store keyed by slug."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._pages: Dict[str, GeneratedPage] = {}
        self._deployed: Dict[str, DeployedPage] = {}

    # ── generated pages ──────────────────────────────────────────────────────

    def find_by_slug(self, slug: str) -> Optional[GeneratedPage]:
        with self._lock:
            page = self._pages.get(slug)
            return page.model_copy(deep=True) if page else None

    def exists_by_slug(self, slug: str) -> bool:
        with self._lock:
            return slug in self._pages

    def insert(self, page: GeneratedPage) -> GeneratedPage:
        """Store *page*, stamping ``updated_at``.

        Raises:
            DuplicateSlugError: if a page with the same slug is already stored.
        """
        with self._lock:
            if page.slug in self._pages:
                raise DuplicateSlugError(page.slug)
            stored = page.model_copy(deep=True, update={"updated_at": utcnow()})
            with self._write():
                self._pages[stored.slug] = stored
            return stored.model_copy(deep=True)

    def delete_by_slug(self, slug: str) -> bool:
        with self._lock:
            if slug not in self._pages:
                return False
            with self._write():
                del self._pages[slug]
            return True

    def delete_by_template_key(self, template_key: str) -> int:
        with self._lock:
            doomed = [s for s, p in self._pages.items() if p.template_key == template_key]
            if doomed:
                with self._write():
                    for slug in doomed:
                        del self._pages[slug]
            return len(doomed)

    def list_by_template_key(
        self,
        template_key: str,
        exclude_slug: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[GeneratedPage]:
        """Pages sharing *template_key* in insertion order, minus *exclude_slug*."""
        with self._lock:
            matches = [
                p.model_copy(deep=True)
                for p in self._pages.values()
                if p.template_key == template_key and p.slug != exclude_slug
            ]
        return matches[:limit] if limit is not None else matches

    def list_all(
        self,
        sort: str = "-created_at",
        skip: int = 0,
        limit: Optional[int] = None,
        template_key: Optional[str] = None,
    ) -> List[GeneratedPage]:
        field = sort.lstrip("-")
        if field not in _SORT_FIELDS:
            raise ValueError(f"Cannot sort pages by '{sort}'.")
        with self._lock:
            pages = [
                p.model_copy(deep=True)
                for p in self._pages.values()
                if template_key is None or p.template_key == template_key
            ]
        pages.sort(key=lambda p: getattr(p, field), reverse=sort.startswith("-"))
        skip = max(skip, 0)
        end = skip + limit if limit is not None else None
        return pages[skip:end]

    def count_all(self, template_key: Optional[str] = None) -> int:
        with self._lock:
            if template_key is None:
                return len(self._pages)
            return sum(1 for p in self._pages.values() if p.template_key == template_key)

    def count_by_template_key(self) -> List[Tuple[str, int]]:
        """``(template_key, count)`` pairs, largest group first."""
        with self._lock:
            counts = Counter(p.template_key for p in self._pages.values())
        return counts.most_common()

    def template_keys(self) -> List[str]:
        with self._lock:
            return sorted({p.template_key for p in self._pages.values()})

    # ── deployed pages ───────────────────────────────────────────────────────

    def exists_deploy_slug(self, deploy_slug: str) -> bool:
        with self._lock:
            return deploy_slug in self._deployed

    def insert_deployed(self, record: DeployedPage) -> DeployedPage:
        with self._lock:
            if record.deploy_slug in self._deployed:
                raise ConflictError(f"Deploy slug '{record.deploy_slug}' already exists.")
            with self._write():
                self._deployed[record.deploy_slug] = record.model_copy(deep=True)
            return record.model_copy(deep=True)

    def find_deployed(self, deploy_slug: str) -> Optional[DeployedPage]:
        with self._lock:
            record = self._deployed.get(deploy_slug)
            return record.model_copy(deep=True) if record else None

    def list_deployed(self, limit: int = 200) -> List[DeployedPage]:
        with self._lock:
            records = [r.model_copy(deep=True) for r in self._deployed.values()]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]

    def delete_deployed(self, deploy_slug: str) -> bool:
        with self._lock:
            if deploy_slug not in self._deployed:
                return False
            with self._write():
                del self._deployed[deploy_slug]
            return True

    @contextmanager
    def _write(self) -> Iterator[None]:
        """Apply one mutation under the lock and commit it.

        If the commit raises, both collections are put back as they were
        before the mutation and the error propagates.
        """
        with self._lock:
            pages, deployed = dict(self._pages), dict(self._deployed)
            try:
                yield
                self._commit()
            except Exception:
                self._pages, self._deployed = pages, deployed
                raise

    def _commit(self) -> None:
        """Hook called under the lock after every mutation."""


class JsonFilePageStore(PageStore):
    """:class:`PageStore` mirrored to a JSON file after every mutation."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        data = json.loads(self.path.read_text(encoding="utf-8"))
        for item in data.get("pages", []):
            page = GeneratedPage.model_validate(item)
            self._pages[page.slug] = page
        for item in data.get("deployed", []):
            record = DeployedPage.model_validate(item)
            self._deployed[record.deploy_slug] = record
        logger.info(
            "Loaded page store from %s", self.path,
            extra={"pages": len(self._pages), "deployed": len(self._deployed)},
        )

    def _commit(self) -> None:
        payload = {
            "pages": [p.model_dump(mode="json", by_alias=True) for p in self._pages.values()],
            "deployed": [r.model_dump(mode="json", by_alias=True) for r in self._deployed.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        # Readers of the file never see a partially written snapshot.
        os.replace(tmp_path, self.path)


def create_store() -> PageStore:
    """Build the store selected by ``STORE_PATH``."""
    if config.STORE_PATH:
        return JsonFilePageStore(config.STORE_PATH)
    return PageStore()
