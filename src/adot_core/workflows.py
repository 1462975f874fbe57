from __future__ import annotations
import datetime
import logging
from typing import Callable, Optional

from .errors import NotFoundError, StoreError
from .geo import GeolocationClient
from .models import (
    LATEST_KEY,
    LOCATION_COLLECTION,
    MICROBLOG_COLLECTION,
    LocationRecord,
    MicroblogPost,
    utcnow,
)
from .settings import ResolvedConfig, Settings, resolve_config
from .store import DocumentStore, FirestoreStore

"""Workflows behind the CLI subcommands.

Location refresh contract:
- The observation timestamp is taken once, before configuration is read.
- Configuration is resolved before any store client exists or any request
  is made.
- The previous "latest" record is removed best-effort; a missing record or
  a failed delete never blocks the refresh.
- A fetch failure aborts without writing. The previous record is not
  restored, so until the next successful run no "latest" record exists.
"""

log = logging.getLogger(__name__)

StoreFactory = Callable[[ResolvedConfig], DocumentStore]
Reporter = Callable[[str], None]


def _log_report(message: str) -> None:
    log.info(message)


def clear_latest_location(store: DocumentStore, report: Reporter = _log_report) -> bool:
    """Delete location/latest, ignoring not-found and every other store error.

    Returns True only when a record was actually deleted.
    """
    try:
        store.delete(LOCATION_COLLECTION, LATEST_KEY)
    except NotFoundError:
        log.debug("no previous %s/%s record", LOCATION_COLLECTION, LATEST_KEY)
        return False
    except StoreError as e:
        log.warning("ignoring failed cleanup of %s/%s: %s", LOCATION_COLLECTION, LATEST_KEY, e)
        return False
    report(f"Deleted existing '{LATEST_KEY}' entry")
    return True


def refresh_location(
    settings: Optional[Settings] = None,
    *,
    store_factory: Optional[StoreFactory] = None,
    geo: Optional[GeolocationClient] = None,
    clock: Callable[[], datetime.datetime] = utcnow,
    report: Reporter = _log_report,
) -> LocationRecord:
    observed_at = clock()
    config = resolve_config(settings, require_token=True)
    store = (store_factory or FirestoreStore.from_config)(config)

    report("Cleaning up existing location entry...")
    clear_latest_location(store, report)

    report("Fetching location data...")
    client = geo or GeolocationClient(config.geo_endpoint)
    try:
        record = client.fetch_location(config.api_token, observed_at)
    finally:
        if geo is None:
            client.close()

    store.insert(LOCATION_COLLECTION, LATEST_KEY, record.to_document())
    log.info(
        "location updated city=%s region=%s country=%s",
        record.city,
        record.region,
        record.country,
    )
    return record


def post_microblog(
    content: str,
    settings: Optional[Settings] = None,
    *,
    store_factory: Optional[StoreFactory] = None,
    clock: Callable[[], datetime.datetime] = utcnow,
) -> MicroblogPost:
    config = resolve_config(settings)
    post = MicroblogPost.new(content, clock())
    store = (store_factory or FirestoreStore.from_config)(config)
    store.insert(MICROBLOG_COLLECTION, post.id, post.to_document())
    return post
