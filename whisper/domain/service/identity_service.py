"""Identity domain service.

Users and admins share one username namespace. Admin display names are a
second namespace, used to route private messages.
"""

from datetime import datetime, timedelta
from typing import Optional, Union
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from whisper.config import ProfileSettings
from whisper.domain.error import (
    AccountDisabledError,
    AccountNotFoundError,
    BusinessRuleViolationError,
    DisplayNameTakenError,
    InboxNotEmptyError,
    InvalidCredentialsError,
    NotAuthorizedError,
    UsernameTakenError,
    ValidationError,
)
from whisper.domain.model import (
    MAX_BIO_LENGTH,
    Actor,
    Admin,
    AdminActor,
    AnonymousActor,
    User,
    UserActor,
)
from whisper.domain.repository import (
    AdminRepository,
    FollowRepository,
    MessageRepository,
    ReactionRepository,
    ReplyRepository,
    UserRepository,
)
from whisper.domain.value import AdminId, UserId
from whisper.domain.value.types import ActorKind, AdminRole, AuthorRef, Username
from whisper.util.password import hash_password, verify_password

from .base import Service
from .visibility_service import VisibilityService

MIN_PASSWORD_LENGTH = 6
MAX_DISPLAY_NAME_LENGTH = 100
MAX_SEARCH_RESULTS = 20

Account = Union[User, Admin]


class IdentityService(Service):
    """Domain service for accounts, sign-in and account moderation."""

    def __init__(
        self,
        user_repository: UserRepository,
        admin_repository: AdminRepository,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        follow_repository: FollowRepository,
        reaction_repository: ReactionRepository,
        visibility_service: VisibilityService,
        profile_settings: ProfileSettings,
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            admin_repository: Admin repository
            message_repository: Message repository (anonymized on delete)
            reply_repository: Reply repository (anonymized on delete)
            follow_repository: Follow repository
            reaction_repository: Reaction repository
            visibility_service: Privilege checks
            profile_settings: Rename cooldown and search limits
        """
        self.user_repository = user_repository
        self.admin_repository = admin_repository
        self.message_repository = message_repository
        self.reply_repository = reply_repository
        self.follow_repository = follow_repository
        self.reaction_repository = reaction_repository
        self.visibility_service = visibility_service
        self.profile_settings = profile_settings

    async def check_username(self, username: str) -> Optional[ActorKind]:
        """Report which namespace holds a username.

        Args:
            username: Username to check

        Returns:
            ActorKind.USER or ActorKind.ADMIN if taken, None if available
        """
        with logfire.span("identity_service.check_username", username=username):
            try:
                name = Username(username)
            except ValueError:
                # Malformed names can never be registered, so none is held
                return None
            if await self.user_repository.find_by_username(name):
                return ActorKind.USER
            if await self.admin_repository.find_by_username(name):
                return ActorKind.ADMIN
            return None

    async def register_user(
        self,
        username: Username,
        password: str,
        display_name: Optional[str] = None,
    ) -> User:
        """Register a Silent Messenger.

        Args:
            username: Login name
            password: Plain-text password, hashed before storage
            display_name: Optional public name

        Returns:
            Created user

        Raises:
            UsernameTakenError: If a user or admin already holds the username
            ValidationError: If the password is too short
        """
        with logfire.span("identity_service.register_user", username=username.root):
            self._validate_password(password)
            await self._ensure_username_free(username)

            user = User(
                id=UserId(uuid4()),
                username=username,
                password_hash=hash_password(password),
                display_name=_clean(display_name),
                created_at=datetime.now(),
            )

            try:
                saved = await self.user_repository.save(user)
            except IntegrityError:
                logfire.warn("Concurrent registration", username=username.root)
                raise UsernameTakenError(username.root, ActorKind.USER.value)

            logfire.info("User registered", user_id=str(saved.id))
            return saved

    async def create_admin(
        self,
        username: Username,
        password: str,
        display_name: str,
        role: AdminRole,
        acting: Actor,
    ) -> Admin:
        """Create a Whisper Listener. Super-admin only.

        Args:
            username: Login name
            password: Plain-text password
            display_name: Name private messages are addressed to
            role: Admin role
            acting: Acting principal

        Returns:
            Created admin

        Raises:
            NotAuthorizedError: If the actor is not a super-admin
            UsernameTakenError: If a user or admin already holds the username
            DisplayNameTakenError: If another admin uses the display name
        """
        with logfire.span(
            "identity_service.create_admin",
            username=username.root,
            role=role.value,
        ):
            self.visibility_service.require_super_admin(acting, "create admins")
            return await self._create_admin(username, password, display_name, role)

    async def bootstrap_super_admin(
        self, username: Username, password: str, display_name: str
    ) -> Admin:
        """Create a super-admin without an acting principal.

        Used by the provisioning script to seed the first account.
        """
        with logfire.span(
            "identity_service.bootstrap_super_admin", username=username.root
        ):
            return await self._create_admin(
                username, password, display_name, AdminRole.SUPER_ADMIN
            )

    async def authenticate(self, username: str, password: str) -> Actor:
        """Sign in a user or an admin.

        Users are looked up before admins.

        Args:
            username: Login name
            password: Plain-text password

        Returns:
            UserActor or AdminActor for the account

        Raises:
            InvalidCredentialsError: If the account is unknown or the password
                does not match
            AccountDisabledError: If the account is deactivated
        """
        with logfire.span("identity_service.authenticate", username=username):
            try:
                name = Username(username)
            except ValueError:
                raise InvalidCredentialsError() from None

            account: Optional[Account] = await self.user_repository.find_by_username(
                name
            )
            if account is None:
                account = await self.admin_repository.find_by_username(name)

            if account is None or not verify_password(password, account.password_hash):
                logfire.warn("Failed sign-in", username=username)
                raise InvalidCredentialsError()

            if not account.is_active:
                logfire.warn("Disabled account sign-in", username=username)
                raise AccountDisabledError()

            logfire.info("Signed in", account_id=str(account.id))
            if isinstance(account, Admin):
                return AdminActor(admin=account)
            return UserActor(user=account)

    async def resolve_actor(self, kind: ActorKind, subject_id: UUID) -> Actor:
        """Resolve a session subject to the acting principal.

        Unknown or deactivated accounts resolve to an anonymous visitor.

        Args:
            kind: Account kind from the session
            subject_id: Account ID from the session

        Returns:
            The acting principal
        """
        with logfire.span(
            "identity_service.resolve_actor", kind=kind.value, subject_id=str(subject_id)
        ):
            if kind == ActorKind.USER:
                user = await self.user_repository.find_by_id(UserId(subject_id))
                if user and user.is_active:
                    return UserActor(user=user)
            elif kind == ActorKind.ADMIN:
                admin = await self.admin_repository.find_by_id(AdminId(subject_id))
                if admin and admin.is_active:
                    return AdminActor(admin=admin)

            logfire.info("Session subject not usable", kind=kind.value)
            return AnonymousActor()

    async def get_account(self, kind: ActorKind, account_id: UUID) -> Account:
        """Get a user or admin.

        Raises:
            AccountNotFoundError: If no such account exists
        """
        with logfire.span(
            "identity_service.get_account", kind=kind.value, account_id=str(account_id)
        ):
            account: Optional[Account] = None
            if kind == ActorKind.USER:
                account = await self.user_repository.find_by_id(UserId(account_id))
            elif kind == ActorKind.ADMIN:
                account = await self.admin_repository.find_by_id(AdminId(account_id))

            if account is None:
                logfire.warn("Account not found", kind=kind.value)
                raise AccountNotFoundError(kind.value, str(account_id))
            return account

    async def set_verification(
        self, kind: ActorKind, account_id: UUID, verified: bool, acting: Actor
    ) -> Account:
        """Grant or revoke the verified badge. Super-admin only.

        Raises:
            NotAuthorizedError: If the actor is not a super-admin
            AccountNotFoundError: If no such account exists
        """
        with logfire.span(
            "identity_service.set_verification",
            kind=kind.value,
            account_id=str(account_id),
            verified=verified,
        ):
            self.visibility_service.require_super_admin(acting, "change verification")
            account = await self.get_account(kind, account_id)
            updated = await self._save_account(
                account.model_copy(update={"is_verified": verified})
            )
            logfire.info("Verification changed", account_id=str(account_id))
            return updated

    async def set_active(
        self, kind: ActorKind, account_id: UUID, active: bool, acting: Actor
    ) -> Account:
        """Activate or deactivate an account.

        Any admin may change a user; only a super-admin may change an admin.

        Raises:
            NotAuthorizedError: If the actor lacks the privilege
            AccountNotFoundError: If no such account exists
            BusinessRuleViolationError: If a super-admin deactivates themselves
            InboxNotEmptyError: If a deactivated admin still has private
                messages waiting
        """
        with logfire.span(
            "identity_service.set_active",
            kind=kind.value,
            account_id=str(account_id),
            active=active,
        ):
            if kind == ActorKind.ADMIN:
                admin = self.visibility_service.require_super_admin(
                    acting, "change admin status"
                )
                if admin.id == account_id and not active:
                    raise BusinessRuleViolationError(
                        "Super-admins cannot deactivate themselves"
                    )
            else:
                self.visibility_service.require_admin(acting, "change user status")

            account = await self.get_account(kind, account_id)
            if isinstance(account, Admin) and account.is_active and not active:
                await self._ensure_inbox_empty(account)
            updated = await self._save_account(
                account.model_copy(update={"is_active": active})
            )
            logfire.info("Account status changed", account_id=str(account_id))
            return updated

    async def delete_account(
        self, kind: ActorKind, account_id: UUID, acting: Actor
    ) -> None:
        """Delete an account. Super-admin only.

        The account's messages and replies stay, with their identity reference
        cleared. Its follow edges and reactions are removed.

        Raises:
            NotAuthorizedError: If the actor is not a super-admin
            AccountNotFoundError: If no such account exists
            BusinessRuleViolationError: If a super-admin deletes themselves
            InboxNotEmptyError: If a deleted admin still has private messages
                waiting
        """
        with logfire.span(
            "identity_service.delete_account",
            kind=kind.value,
            account_id=str(account_id),
        ):
            admin = self.visibility_service.require_super_admin(
                acting, "delete accounts"
            )
            if kind == ActorKind.ADMIN and admin.id == account_id:
                raise BusinessRuleViolationError(
                    "Super-admins cannot delete their own account"
                )

            account = await self.get_account(kind, account_id)
            if isinstance(account, Admin):
                await self._ensure_inbox_empty(account)

            author = (
                AuthorRef.of_admin(AdminId(account.id))
                if isinstance(account, Admin)
                else AuthorRef.of_user(UserId(account.id))
            )

            messages = await self.message_repository.clear_author(author)
            replies = await self.reply_repository.clear_author(author)
            follows = await self.follow_repository.delete_by_account(kind, account_id)
            reacted = await self.reaction_repository.delete_by_reactor(author)
            for message_id in reacted:
                await self.message_repository.decrement_reaction_count(message_id)

            if isinstance(account, Admin):
                await self.admin_repository.delete(account.id)
            else:
                await self.user_repository.delete(account.id)

            logfire.info(
                "Account deleted",
                kind=kind.value,
                account_id=str(account_id),
                anonymized_messages=messages,
                anonymized_replies=replies,
                removed_follows=follows,
                removed_reactions=len(reacted),
            )

    async def update_profile(
        self,
        kind: ActorKind,
        account_id: UUID,
        acting: Actor,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        profile_picture_url: Optional[str] = None,
    ) -> Account:
        """Edit an account's own profile.

        Omitted fields are left alone; an empty string clears a field. A
        display name can change once per cooldown period. When an admin is
        renamed, private messages still waiting for them follow the new name.

        Args:
            kind: Account kind
            account_id: Account ID
            acting: Acting principal (must be the account itself)
            display_name: New display name
            bio: New bio
            profile_picture_url: New profile picture URL

        Returns:
            The updated account

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is another account
            AccountNotFoundError: If no such account exists
            ValidationError: If a field is malformed or too long
            BusinessRuleViolationError: If the display name changed too recently
            DisplayNameTakenError: If another admin uses the new display name
        """
        with logfire.span(
            "identity_service.update_profile",
            kind=kind.value,
            account_id=str(account_id),
        ):
            self.visibility_service.require_authenticated(acting, "edit profiles")
            owner_id = (
                acting.user.id if isinstance(acting, UserActor) else acting.admin.id
            )
            if acting.kind != kind or owner_id != account_id:
                logfire.warn("Foreign profile edit denied", account_id=str(account_id))
                raise NotAuthorizedError(
                    "edit profiles", reason="profiles can only be edited by their owner"
                )

            account = await self.get_account(kind, account_id)
            update: dict = {}

            if bio is not None:
                bio = _clean(bio)
                if bio and len(bio) > MAX_BIO_LENGTH:
                    raise ValidationError(
                        f"Bio cannot exceed {MAX_BIO_LENGTH} characters"
                    )
                update["bio"] = bio

            if profile_picture_url is not None:
                update["profile_picture_url"] = _parse_picture_url(profile_picture_url)

            old_name = account.display_name
            new_name = old_name
            if display_name is not None:
                new_name = _clean(display_name)
                if new_name and len(new_name) > MAX_DISPLAY_NAME_LENGTH:
                    raise ValidationError(
                        "Display name cannot exceed "
                        f"{MAX_DISPLAY_NAME_LENGTH} characters"
                    )
                if isinstance(account, Admin) and not new_name:
                    raise ValidationError("Display name is required")

            renamed = new_name != old_name
            if renamed:
                self._check_rename_cooldown(account)
                if isinstance(account, Admin):
                    holder = await self.admin_repository.find_by_display_name(new_name)
                    if holder is not None and holder.id != account.id:
                        logfire.warn("Display name taken", display_name=new_name)
                        raise DisplayNameTakenError(new_name)
                update["display_name"] = new_name
                update["display_name_changed_at"] = datetime.now()

            try:
                updated = await self._save_account(account.model_copy(update=update))
            except IntegrityError:
                logfire.warn("Concurrent rename", display_name=new_name)
                raise DisplayNameTakenError(str(new_name))

            if renamed and isinstance(account, Admin):
                moved = await self.message_repository.readdress_private(
                    old_name, new_name
                )
                logfire.info(
                    "Inbox readdressed",
                    admin_id=str(account.id),
                    messages=moved,
                )

            logfire.info(
                "Profile updated",
                account_id=str(account_id),
                fields=sorted(update),
            )
            return updated

    async def search_accounts(self, query: str) -> tuple[list[User], list[Admin]]:
        """Find active users and admins by username or display name.

        Args:
            query: Case-insensitive substring

        Returns:
            Matching users and admins, newest first

        Raises:
            ValidationError: If the query is shorter than the minimum length
        """
        query = (query or "").strip()
        with logfire.span("identity_service.search_accounts", query=query):
            min_length = self.profile_settings.min_search_length
            if len(query) < min_length:
                raise ValidationError(
                    f"Search query must be at least {min_length} characters"
                )

            users = await self.user_repository.search(query, MAX_SEARCH_RESULTS)
            admins = await self.admin_repository.search(query, MAX_SEARCH_RESULTS)
            logfire.info(
                "Accounts searched", users=len(users), admins=len(admins)
            )
            return users, admins

    async def list_recipients(self) -> list[str]:
        """List display names private messages can be addressed to.

        Returns:
            Display names of active admins
        """
        with logfire.span("identity_service.list_recipients"):
            admins = await self.admin_repository.find_active()
            return [admin.display_name for admin in admins]

    async def _create_admin(
        self, username: Username, password: str, display_name: str, role: AdminRole
    ) -> Admin:
        self._validate_password(password)
        display_name = display_name.strip()
        if not display_name:
            raise ValidationError("Display name is required")

        await self._ensure_username_free(username)
        if await self.admin_repository.find_by_display_name(display_name):
            logfire.warn("Display name taken", display_name=display_name)
            raise DisplayNameTakenError(display_name)

        admin = Admin(
            id=AdminId(uuid4()),
            username=username,
            password_hash=hash_password(password),
            display_name=display_name,
            role=role,
            created_at=datetime.now(),
        )
        saved = await self.admin_repository.save(admin)
        logfire.info("Admin created", admin_id=str(saved.id), role=role.value)
        return saved

    async def _ensure_username_free(self, username: Username) -> None:
        holder = await self.check_username(username.root)
        if holder is not None:
            logfire.warn(
                "Username taken", username=username.root, taken_by=holder.value
            )
            raise UsernameTakenError(username.root, holder.value)

    def _check_rename_cooldown(self, account: Account) -> None:
        changed_at = account.display_name_changed_at
        if changed_at is None:
            return
        cooldown = timedelta(days=self.profile_settings.display_name_cooldown_days)
        if datetime.now(changed_at.tzinfo) - changed_at < cooldown:
            logfire.warn("Display name cooldown", account_id=str(account.id))
            raise BusinessRuleViolationError(
                f"Display name can only be changed once every {cooldown.days} days"
            )

    async def _ensure_inbox_empty(self, admin: Admin) -> None:
        pending = await self.message_repository.count_private_by_recipient(
            admin.display_name
        )
        if pending:
            logfire.warn(
                "Admin has pending private messages",
                admin_id=str(admin.id),
                pending=pending,
            )
            raise InboxNotEmptyError(admin.display_name, pending)

    async def _save_account(self, account: Account) -> Account:
        if isinstance(account, Admin):
            return await self.admin_repository.save(account)
        return await self.user_repository.save(account)

    @staticmethod
    def _validate_password(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _parse_picture_url(url: str) -> Optional[str]:
    url = url.strip()
    if not url:
        return None
    if not url.startswith(("http://", "https://")):
        raise ValidationError("Profile picture must be an http(s) URL")
    if len(url) > 2000:
        raise ValidationError("Profile picture URL is too long")
    return url
