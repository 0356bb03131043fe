"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class RecipientRequiredError(ValidationError):
    """Raised when a private message names no recipient."""

    def __init__(self) -> None:
        super().__init__("Private messages require a recipient")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class ConflictingIdentityError(DomainError):
    """Raised when content is attributed to both a user and an admin."""

    def __init__(self, user_id: str, admin_id: str):
        self.user_id = user_id
        self.admin_id = admin_id
        super().__init__(
            f"Content cannot be attributed to user {user_id} and admin {admin_id}"
        )


class UsernameTakenError(DomainError):
    """Raised when a username is already used by a user or an admin."""

    def __init__(self, username: str, taken_by: str):
        self.username = username
        self.taken_by = taken_by
        super().__init__(f"Username '{username}' is already taken by a {taken_by}")


class DisplayNameTakenError(DomainError):
    """Raised when an admin display name is already in use."""

    def __init__(self, display_name: str):
        super().__init__(f"Display name '{display_name}' is already taken")


class AlreadyPublicError(BusinessRuleViolationError):
    """Raised when promoting a message that is already public."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Message {message_id} is already public")


class InvalidTransitionError(BusinessRuleViolationError):
    """Raised for a visibility change the state machine does not allow."""

    def __init__(self, source: str, target: str):
        super().__init__(f"Cannot move a message from {source} to {target}")


class MaxDepthExceededError(BusinessRuleViolationError):
    """Raised when a reply would nest deeper than allowed."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Reply depth {depth} exceeds maximum of {max_depth}")


class AlreadyReactedError(BusinessRuleViolationError):
    """Raised when an actor reacts to the same message twice."""

    def __init__(self, message_id: str):
        super().__init__(f"Already reacted to message {message_id}")


class InboxNotEmptyError(BusinessRuleViolationError):
    """Raised when an admin with pending private messages would be removed."""

    def __init__(self, display_name: str, pending: int):
        self.display_name = display_name
        self.pending = pending
        super().__init__(
            f"Admin '{display_name}' still has {pending} private message(s) to handle"
        )


class NotAuthorizedError(DomainError):
    """Raised when an actor lacks the privilege for an action."""

    def __init__(self, action: str, reason: str = "admin privileges required"):
        self.action = action
        super().__init__(f"Not authorized to {action}: {reason}")


class AuthenticationRequiredError(NotAuthorizedError):
    """Raised when an anonymous visitor attempts an account-only action."""

    def __init__(self, action: str):
        super().__init__(action, reason="sign in required")


class InvalidCredentialsError(DomainError):
    """Raised when a username/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class AccountDisabledError(DomainError):
    """Raised when a deactivated account tries to sign in."""

    def __init__(self) -> None:
        super().__init__("Account is disabled")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class MessageNotFoundError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__("Message", identifier)


class ParentNotFoundError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__("Parent reply", identifier)


class ReplyNotFoundError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__("Reply", identifier)


class UnknownRecipientError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__("Recipient", identifier)


class AccountNotFoundError(NotFoundError):
    def __init__(self, kind: str, identifier: str):
        super().__init__(kind.capitalize(), identifier)
