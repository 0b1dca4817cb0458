"""
Application state for splitledger: the user and group registries.

One AppState is owned by the presentation layer and passed to whatever
needs a name lookup. There are no module-level registries.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from splitledger.core.config import LedgerConfig, config_from_env, parse_mode
from splitledger.core.exceptions import DuplicateIdentityError, UnknownIdentityError
from splitledger.core.models import User
from splitledger.ledger.group import Group


@dataclass
class AppState:
    """Name-keyed users and groups for one session."""

    config: LedgerConfig = field(default_factory=LedgerConfig)
    users:  Dict[str, User]  = field(default_factory=dict)
    groups: Dict[str, Group] = field(default_factory=dict)

    @classmethod
    def from_env(cls, mode: Optional[str] = None) -> "AppState":
        """Config from SPLITLEDGER_* env vars; `mode` overrides SPLITLEDGER_MODE."""
        config = config_from_env()
        if mode is not None:
            config = replace(config, mode=parse_mode(mode))
        return cls(config=config)

    def create_user(self, name: str) -> User:
        """Register a user. Re-registering a name returns the existing user."""
        existing = self.users.get(name)
        if existing is not None:
            return existing
        user = User(name)
        self.users[name] = user
        return user

    def create_group(self, name: str) -> Group:
        if name in self.groups:
            raise DuplicateIdentityError(f"Group '{name}' already exists")
        group = Group(name, config=self.config)
        self.groups[name] = group
        return group

    def get_user(self, name: str) -> User:
        user = self.users.get(name)
        if user is None:
            raise UnknownIdentityError(f"Unknown user '{name}'")
        return user

    def get_group(self, name: str) -> Group:
        group = self.groups.get(name)
        if group is None:
            raise UnknownIdentityError(f"Unknown group '{name}'")
        return group

    def add_user_to_group(self, group_name: str, user_name: str) -> bool:
        """Returns True if the user was newly added."""
        group = self.get_group(group_name)
        return group.add_member(self.get_user(user_name))

    def __repr__(self) -> str:
        return (
            f"AppState("
            f"mode={self.config.mode.value!r}, "
            f"users={len(self.users)}, "
            f"groups={len(self.groups)})"
        )
