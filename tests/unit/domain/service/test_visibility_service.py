"""Unit tests for VisibilityService."""

from uuid import uuid4

import pytest

from tests.conftest import make_admin, make_user
from whisper.domain.error import (
    AlreadyPublicError,
    AuthenticationRequiredError,
    InvalidTransitionError,
    NotAuthorizedError,
)
from whisper.domain.model import AdminActor, AnonymousActor, Message, UserActor
from whisper.domain.service import VisibilityService
from whisper.domain.value import MessageId
from whisper.domain.value.types import AdminRole, Category, Visibility


def _message(is_public: bool, recipient: str | None = "Luna") -> Message:
    return Message(
        id=MessageId(uuid4()),
        category=Category.CONFESSION,
        content="I never told anyone",
        is_public=is_public,
        recipient=recipient,
    )


class TestTransition:
    """Tests for the visibility state machine."""

    def test_private_message_can_become_public(self):
        service = VisibilityService()

        assert service.transition(_message(False), Visibility.PUBLIC) == Visibility.PUBLIC

    def test_public_message_cannot_be_promoted_again(self):
        service = VisibilityService()

        with pytest.raises(AlreadyPublicError):
            service.transition(_message(True), Visibility.PUBLIC)

    def test_public_message_cannot_be_demoted(self):
        """Public is terminal; moving back is a different error than re-promoting."""
        service = VisibilityService()

        with pytest.raises(InvalidTransitionError):
            service.transition(_message(True), Visibility.PRIVATE_PENDING)

    def test_private_to_private_is_not_a_transition(self):
        service = VisibilityService()

        with pytest.raises(InvalidTransitionError):
            service.transition(_message(False), Visibility.PRIVATE_PENDING)


class TestCanRead:
    """Tests for read access."""

    def test_public_message_is_readable_by_anyone(self):
        service = VisibilityService()
        message = _message(True, recipient=None)

        assert service.can_read(AnonymousActor(), message)
        assert service.can_read(UserActor(user=make_user()), message)

    def test_private_message_hidden_from_anonymous_and_users(self):
        service = VisibilityService()
        message = _message(False)

        assert not service.can_read(AnonymousActor(), message)
        assert not service.can_read(UserActor(user=make_user()), message)

    def test_private_message_readable_by_recipient_admin(self):
        service = VisibilityService()
        luna = AdminActor(admin=make_admin(display_name="Luna"))

        assert service.can_read(luna, _message(False, recipient="Luna"))

    def test_private_message_hidden_from_other_admins(self):
        service = VisibilityService()
        sol = AdminActor(admin=make_admin(username="sol_listens", display_name="Sol"))

        assert not service.can_read(sol, _message(False, recipient="Luna"))

    def test_super_admin_reads_every_inbox(self):
        service = VisibilityService()
        root = AdminActor(
            admin=make_admin(
                username="root_admin", display_name="Root", role=AdminRole.SUPER_ADMIN
            )
        )

        assert service.can_read(root, _message(False, recipient="Luna"))


class TestPrivilegeChecks:
    """Tests for require_admin / require_super_admin / require_authenticated."""

    def test_require_admin_rejects_anonymous_as_unauthenticated(self):
        service = VisibilityService()

        with pytest.raises(AuthenticationRequiredError):
            service.require_admin(AnonymousActor(), "promote messages")

    def test_require_admin_rejects_users(self):
        service = VisibilityService()

        with pytest.raises(NotAuthorizedError) as exc_info:
            service.require_admin(UserActor(user=make_user()), "promote messages")

        assert not isinstance(exc_info.value, AuthenticationRequiredError)

    def test_require_admin_returns_admin(self):
        service = VisibilityService()
        admin = make_admin()

        assert service.require_admin(AdminActor(admin=admin), "delete") == admin

    def test_require_super_admin_rejects_plain_admin(self):
        service = VisibilityService()

        with pytest.raises(NotAuthorizedError, match="super-admin"):
            service.require_super_admin(AdminActor(admin=make_admin()), "create admins")

    def test_require_authenticated_accepts_users(self):
        service = VisibilityService()

        service.require_authenticated(UserActor(user=make_user()), "react")

    def test_require_authenticated_rejects_anonymous(self):
        service = VisibilityService()

        with pytest.raises(AuthenticationRequiredError):
            service.require_authenticated(AnonymousActor(), "react")
