"""Firebase verification provider implementation using the Admin SDK.

The provider registers a single named Firebase app per run and deletes it
before the next initialization, so repeated runs never accumulate apps.

Credentials come from a service account key file (a "serviceAccount" entry in
the pasted configuration, or firebase.credentials in app_config.yaml). Without
one, firebase_admin falls back to Application Default Credentials; when none
are found the Auth module is still reported, marked as unauthenticated.

firebase_admin handles:
- App registry and option validation (initialize_app / delete_app)
- Service account certificates and credential discovery
- Auth client construction for the app
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth, credentials
from google.auth.exceptions import DefaultCredentialsError, GoogleAuthError

from sdkprobe.config.constants import (
    DEFAULT_FIREBASE_APP_NAME,
    FIREBASE_CREDENTIALS_KEY,
    FIREBASE_REQUIRED_KEYS,
)
from sdkprobe.diagnostics.errors import SubCapabilityError
from sdkprobe.providers.base import (
    InitResult,
    ParsedConfig,
    SubCapabilityReport,
    VerificationProvider,
)

logger = logging.getLogger(__name__)

# Web config keys that have an Admin SDK option counterpart
_OPTION_KEYS = {
    "projectId": "projectId",
    "storageBucket": "storageBucket",
    "databaseURL": "databaseURL",
}

UNAUTHENTICATED = "none (no service credentials; Admin API calls unauthenticated)"


class FirebaseProvider(VerificationProvider):
    """Firebase provider backed by firebase_admin."""

    required_keys = FIREBASE_REQUIRED_KEYS
    sub_capability_name = "Auth"

    def __init__(
        self,
        app_name: str = DEFAULT_FIREBASE_APP_NAME,
        credentials_path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.app_name = app_name
        self.credentials_path = credentials_path

    @property
    def provider_name(self) -> str:
        return "firebase"

    @staticmethod
    def build_app_options(values: Dict[str, Any]) -> Dict[str, Any]:
        """Translate a web firebaseConfig into Admin SDK app options."""
        return {
            option: values[key]
            for key, option in _OPTION_KEYS.items()
            if values.get(key)
        }

    def credentials_source(self, values: Dict[str, Any]) -> Optional[Path]:
        """Service account key file for a run, or None to use default credentials."""
        path = values.get(FIREBASE_CREDENTIALS_KEY) or self.credentials_path
        return Path(str(path)).expanduser() if path else None

    async def initialize(self, config: ParsedConfig) -> InitResult:
        await self.dispose()

        options = self.build_app_options(config.values)
        key_file = self.credentials_source(config.values)
        try:
            credential = credentials.Certificate(str(key_file)) if key_file else None
            app = firebase_admin.initialize_app(
                credential=credential, options=options, name=self.app_name
            )
        except (ValueError, OSError, GoogleAuthError) as e:
            logger.warning(f"Firebase initialization failed: {e}")
            return InitResult(error=e, message="Firebase could not be initialized.")

        self._handle = app
        credential_label = f"service account ({key_file.name})" if key_file else "application default"
        logger.info(
            f"Firebase app '{app.name}' initialized for project {options.get('projectId')} "
            f"with {credential_label} credentials"
        )
        return InitResult(
            handle=app,
            summary=(
                f'App name: "{app.name}"\n'
                f"Project ID: {app.project_id}\n"
                f"Storage bucket: {options.get('storageBucket', 'not set')}\n"
                f"Credentials: {credential_label}"
            ),
        )

    async def inspect_sub_capability(self, handle: Any) -> SubCapabilityReport:
        if handle is None:
            raise SubCapabilityError("Could not obtain the Auth instance: no initialized app.")
        try:
            # Building the client resolves credentials, which may query the
            # metadata server; keep it off the event loop.
            client = await asyncio.to_thread(auth.Client, handle)
        except DefaultCredentialsError as e:
            logger.info(f"Auth module available without credentials: {e}")
            return SubCapabilityReport(
                present=True,
                summary=(
                    f"Auth module bound to project {handle.project_id}\n"
                    f"Credentials: {UNAUTHENTICATED}"
                ),
                session=None,
                details={"authenticated": False},
            )
        except (ValueError, GoogleAuthError) as e:
            logger.warning(f"Auth client could not be created: {e}")
            raise SubCapabilityError(f"Could not obtain the Auth instance: {e}") from e

        # The Admin SDK acts as a service, never as a signed-in end user.
        return SubCapabilityReport(
            present=True,
            summary=f"Auth client bound to project {handle.project_id}",
            session=None,
            details={"authenticated": True, "tenant_id": client.tenant_id},
        )

    async def dispose(self) -> None:
        app = self._handle
        self._handle = None
        if app is None:
            # An app registered under our name by an earlier process state
            try:
                app = firebase_admin.get_app(self.app_name)
            except ValueError:
                return
        try:
            firebase_admin.delete_app(app)
            logger.info(f"Firebase app '{self.app_name}' deleted")
        except ValueError as e:
            logger.debug(f"Firebase app already deleted: {e}")
