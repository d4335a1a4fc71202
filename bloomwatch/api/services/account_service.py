# This file implements sign-up, login, history, and contact services.
# Identity comes from Firebase Authentication; profiles, history, and messages live in Firestore.

from __future__ import annotations

import logging

from bloomwatch.accounts.firestore_client import FirestoreClient
from bloomwatch.accounts.history import HistoryEvent, HistoryStore
from bloomwatch.accounts.identity_client import AuthenticatedUser, IdentityClient
from bloomwatch.accounts.records import create_user_profile, submit_contact_message
from bloomwatch.api.api_config import ApiConfig

logger = logging.getLogger(__name__)

CONTACT_THANKS = "Thank you for your message! We will get back to you soon."


class AccountService:
    def __init__(
        self,
        *,
        config: ApiConfig,
        identity: IdentityClient,
        firestore: FirestoreClient,
        history: HistoryStore,
    ) -> None:
        self.config = config
        self.identity = identity
        self.firestore = firestore
        self.history = history

    def sign_up(self, *, email: str, password: str, display_name: str) -> AuthenticatedUser:
        user = self.identity.sign_up(email=email, password=password, display_name=display_name)
        create_user_profile(
            self.firestore,
            uid=user.uid,
            email=user.email,
            display_name=display_name,
            id_token=user.id_token,
        )
        return user

    def log_in(self, *, email: str, password: str) -> AuthenticatedUser:
        user = self.identity.sign_in(email=email, password=password)
        logger.info("User %s signed in", user.uid)
        return user

    def recent_history(self, user: AuthenticatedUser) -> list[HistoryEvent]:
        return self.history.recent_events(user, limit=self.config.history_limit)

    def contact(self, *, name: str, email: str, message: str) -> dict[str, object]:
        record = submit_contact_message(self.firestore, name=name, email=email, message=message)
        return {"message": CONTACT_THANKS, "sent_at": record.sent_at}
