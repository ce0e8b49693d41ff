"""Composition root: turns Settings into exactly one ProductRepository.

This is the only place that switches on the configured backend. Build
the repository once at startup and pass it to whatever needs it.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from catalog.domain.exceptions import UnimplementedRepositoryError
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import RepositoryType, Settings
from catalog.infrastructure.persistence.dataset_loader import load_dataset
from catalog.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> ProductRepository:
    logger.info(
        "Building %s repository (dataset=%s)",
        getattr(settings.repo_type, "value", settings.repo_type),
        settings.init_dataset.value,
    )

    if settings.repo_type == RepositoryType.IN_MEMORY:
        return InMemoryProductRepository(load_dataset(settings.init_dataset))

    if settings.repo_type == RepositoryType.RELATIONAL:
        engine = create_sql_engine(settings)
        try:
            return SqlProductRepository(engine, load_dataset(settings.init_dataset))
        except Exception:
            engine.dispose()
            raise

    raise UnimplementedRepositoryError(
        f"Repository type {settings.repo_type!r} is not implemented"
    )


def create_sql_engine(settings: Settings) -> Engine:
    url = make_url(settings.database_url)
    kwargs: dict = {"pool_pre_ping": True}
    timeout_ms = int(settings.query_timeout * 1000)

    backend = url.get_backend_name()
    if backend == "postgresql":
        kwargs["connect_args"] = {"options": f"-c statement_timeout={timeout_ms}"}
    elif backend == "sqlite":
        kwargs["connect_args"] = {
            "timeout": settings.query_timeout,
            "check_same_thread": False,
        }
        if url.database in (None, "", ":memory:"):
            # Every connection to an in-memory database is a new, empty database.
            kwargs["poolclass"] = StaticPool

    return create_engine(url, **kwargs)
