"""Elasticsearch client wrapper with fail-open behavior."""

import logging

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import (
    ApiError,
    ConnectionError,
    TransportError,
)

from discovery.core.config import settings

logger = logging.getLogger(__name__)

# Singleton client instance
_es_client: Elasticsearch | None = None


def get_es_client() -> Elasticsearch | None:
    """
    Get Elasticsearch client singleton.

    Returns None if Elasticsearch is disabled or unavailable.
    Callers decide whether a missing client is an error (catalog search)
    or can be skipped (More Like This, readiness).
    """
    global _es_client

    if not settings.ELASTICSEARCH_ENABLED:
        return None

    if _es_client is not None:
        return _es_client

    try:
        basic_auth = None
        if settings.ELASTICSEARCH_USERNAME and settings.ELASTICSEARCH_PASSWORD:
            basic_auth = (settings.ELASTICSEARCH_USERNAME, settings.ELASTICSEARCH_PASSWORD)

        client = Elasticsearch(
            [settings.ELASTICSEARCH_URL],
            basic_auth=basic_auth,
            request_timeout=settings.ELASTICSEARCH_REQUEST_TIMEOUT_MS / 1000.0,
            max_retries=settings.ELASTICSEARCH_RETRY_MAX,
            retry_on_timeout=True,
        )

        try:
            if not client.ping():
                logger.warning("Elasticsearch ping failed, client will return None")
                return None
        except Exception as e:
            logger.warning(f"Elasticsearch ping failed during initialization: {e}")
            return None

        _es_client = client
        logger.debug("Elasticsearch client initialized successfully")
        return _es_client

    except Exception as e:
        logger.warning(f"Failed to initialize Elasticsearch client: {e}", exc_info=True)
        return None


def ping() -> bool:
    """
    Ping Elasticsearch to check connectivity.

    Returns False if disabled, unavailable, or ping fails.
    Never raises exceptions.
    """
    if not settings.ELASTICSEARCH_ENABLED:
        return False

    client = get_es_client()
    if client is None:
        return False

    try:
        return bool(client.ping())
    except (ConnectionError, TransportError, ApiError) as e:
        logger.debug(f"Elasticsearch ping failed: {e}")
        return False
    except Exception as e:
        logger.warning(f"Unexpected error during Elasticsearch ping: {e}", exc_info=True)
        return False


def reset_client() -> None:
    """Reset the singleton client (useful for testing)."""
    global _es_client
    _es_client = None
