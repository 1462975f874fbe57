from __future__ import annotations
import logging
from typing import Any, Dict

from google.api_core import exceptions as gexc
from google.auth import exceptions as auth_exc
from google.cloud import firestore
from google.oauth2 import service_account

from .errors import NotFoundError, StoreError
from .settings import ResolvedConfig

log = logging.getLogger(__name__)


class DocumentStore:
    """Minimal key/document capability: insert and delete by (collection, id)."""

    def insert(self, collection: str, doc_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError


class FirestoreStore(DocumentStore):
    """DocumentStore backed by Google Cloud Firestore.

    Credentials are loaded from the service-account file handed in by the
    caller; the process environment is never consulted or modified.
    Every call is a single round trip, without batching or transactions.
    """

    def __init__(self, project_id: str, credentials_path: str):
        self.project_id = project_id
        try:
            creds = service_account.Credentials.from_service_account_file(
                credentials_path
            )
        except (OSError, ValueError) as e:
            raise StoreError("load credentials", cause=str(e)) from e
        self.client = firestore.Client(project=project_id, credentials=creds)
        log.debug("firestore client ready project=%s", project_id)

    @classmethod
    def from_config(cls, config: ResolvedConfig) -> "FirestoreStore":
        return cls(config.project_id, config.credentials_path)

    def insert(self, collection: str, doc_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ref = self.client.collection(collection).document(doc_id)
        try:
            ref.set(record)
        except (gexc.GoogleAPIError, auth_exc.GoogleAuthError) as e:
            log.error("insert %s/%s failed: %s", collection, doc_id, e)
            raise StoreError("insert", collection, doc_id, str(e)) from e
        log.info("inserted %s/%s", collection, doc_id)
        return dict(record)

    def delete(self, collection: str, doc_id: str) -> None:
        ref = self.client.collection(collection).document(doc_id)
        # Firestore deletes are silent on missing documents unless an
        # exists precondition is attached.
        option = self.client.write_option(exists=True)
        try:
            ref.delete(option=option)
        except gexc.NotFound as e:
            raise NotFoundError(collection, doc_id) from e
        except (gexc.GoogleAPIError, auth_exc.GoogleAuthError) as e:
            raise StoreError("delete", collection, doc_id, str(e)) from e
        log.info("deleted %s/%s", collection, doc_id)
