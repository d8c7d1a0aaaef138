# ==============================================
# SessionStore
# ==============================================
#
# PURPOSE:
#   Holds the currently authenticated identity and the credential
#   roster it is validated against.
#
# PERSISTED KEYS:
# ---------------
#   - session_token     → opaque marker, present while logged in
#   - current_identity  → serialized Identity
#   - credential_roster → list of CredentialEntry
#
# CONTRACT:
# ---------
#   - login(email, password) -> bool
#       Exact (email, password) match. On failure the current identity
#       is left untouched.
#   - register(name, email, password, role="user") -> bool
#       False on a duplicate email (case-sensitive) or an unknown role.
#       On success the roster is persisted with the new entry, then the
#       entry is kept in memory and the new identity logged in. A failed
#       roster write raises and registers nothing.
#   - logout() -> None
#
#   Credential mismatch and duplicate registration both return False;
#   callers cannot tell them apart.
#
# IDENTITY IDS:
# -------------
#   The administrator always gets config.admin_id.
#   stable_identity_ids=True  → id minted once at registration, kept on
#                               the roster entry and reused on every login.
#   stable_identity_ids=False → a fresh id on every login.
#
# STARTUP:
# --------
#   Load the roster (seed the administrator when absent, corrupt or
#   empty). When both a token and an identity are persisted, restore
#   the identity without re-validating credentials. A corrupt identity
#   is discarded together with its token.
#
# ==============================================

import secrets
from typing import List, Optional

from ewaste.config import SessionConfig
from ewaste.domain import Role, Identity, CredentialEntry
from ewaste.errors import ValidationError
from ewaste.ids import IdFactory
from ewaste.persistence import KeyValueStore
from .seed import seed_roster


class SessionStore:
    TOKEN_KEY = "session_token"
    IDENTITY_KEY = "current_identity"
    ROSTER_KEY = "credential_roster"

    def __init__(self, kv: KeyValueStore, config: Optional[SessionConfig] = None,
                 id_factory: Optional[IdFactory] = None):
        self._kv = kv
        self._config = config or SessionConfig()
        self._ids = id_factory or IdFactory()
        self._current: Optional[Identity] = None

        self._roster = self._load_roster()
        self._restore_session()

    # --- read side ---

    @property
    def current(self) -> Optional[Identity]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def roster(self) -> List[CredentialEntry]:
        return list(self._roster)

    # --- operations ---

    def login(self, email: str, password: str) -> bool:
        entry = next((e for e in self._roster if e.matches(email, password)), None)
        if entry is None:
            return False

        self._set_current(self._identity_for(entry))
        return True

    def register(self, name: str, email: str, password: str, role: str = "user") -> bool:
        try:
            role_enum = Role(role)
        except ValueError:
            return False

        if any(e.email == email for e in self._roster):
            return False

        entry = CredentialEntry(
            email=email,
            password=password,
            name=name,
            role=role_enum,
            user_id=self._ids.next_id() if self._config.stable_identity_ids else None,
        )
        roster = self._roster + [entry]
        self._save_roster(roster)
        self._roster = roster

        self._set_current(self._identity_for(entry))
        return True

    def logout(self) -> None:
        self._current = None
        self._kv.delete(self.TOKEN_KEY)
        self._kv.delete(self.IDENTITY_KEY)

    # --- internals ---

    def _identity_for(self, entry: CredentialEntry) -> Identity:
        if entry.email == self._config.admin_email:
            identity_id = self._config.admin_id
        elif self._config.stable_identity_ids and entry.user_id:
            identity_id = entry.user_id
        else:
            identity_id = self._ids.next_id()

        return Identity(id=identity_id, name=entry.name, email=entry.email, role=entry.role)

    def _set_current(self, identity: Identity) -> None:
        self._kv.set(self.TOKEN_KEY, secrets.token_urlsafe(24))
        self._kv.set(self.IDENTITY_KEY, identity.to_dict())
        self._current = identity

    def _save_roster(self, roster: List[CredentialEntry]) -> None:
        self._kv.set(self.ROSTER_KEY, [entry.to_dict() for entry in roster])

    def _load_roster(self) -> List[CredentialEntry]:
        raw = self._kv.get(self.ROSTER_KEY)
        roster: List[CredentialEntry] = []

        if isinstance(raw, list):
            for item in raw:
                try:
                    roster.append(CredentialEntry.from_dict(item))
                except ValidationError as e:
                    print(f"⚠ Skipping malformed roster entry: {e}")

        if not roster:
            return seed_roster(self._config)

        if self._config.stable_identity_ids:
            self._backfill_user_ids(roster)
        return roster

    def _backfill_user_ids(self, roster: List[CredentialEntry]) -> None:
        # Entries written with per-login ids get their stable id now
        self._ids.observe(e.user_id for e in roster if e.user_id)
        missing = [e for e in roster if not e.user_id]
        if not missing:
            return
        for entry in missing:
            if entry.email == self._config.admin_email:
                entry.user_id = self._config.admin_id
            else:
                entry.user_id = self._ids.next_id()
        self._save_roster(roster)
        print(f"✓ Assigned stable ids to {len(missing)} roster entries")

    def _restore_session(self) -> None:
        token = self._kv.get(self.TOKEN_KEY)
        data = self._kv.get(self.IDENTITY_KEY)

        if token and data is not None:
            try:
                self._current = Identity.from_dict(data)
                return
            except ValidationError as e:
                print(f"⚠ Discarding corrupt session identity: {e}")

        if token or self._kv.exists(self.IDENTITY_KEY):
            self._kv.delete(self.TOKEN_KEY)
            self._kv.delete(self.IDENTITY_KEY)
