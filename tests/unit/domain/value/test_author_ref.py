"""Unit tests for author attribution and usernames."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from whisper.domain.error import ConflictingIdentityError, ValidationError
from whisper.domain.value import AdminId, UserId
from whisper.domain.value.types import ActorKind, AuthorRef, Username


class TestAuthorRef:
    """Tests for AuthorRef."""

    def test_resolve_user(self):
        user_id = UserId(uuid4())

        author = AuthorRef.resolve(user_id, None)

        assert author.kind == ActorKind.USER
        assert author.identity_id == user_id

    def test_resolve_admin(self):
        admin_id = AdminId(uuid4())

        author = AuthorRef.resolve(None, admin_id)

        assert author.kind == ActorKind.ADMIN
        assert author.identity_id == admin_id

    def test_resolve_anonymous(self):
        author = AuthorRef.resolve(None, None)

        assert author.is_anonymous
        assert author.identity_id is None

    def test_both_ids_conflict(self):
        with pytest.raises(ConflictingIdentityError):
            AuthorRef.resolve(UserId(uuid4()), AdminId(uuid4()))

    def test_shape_must_match_kind(self):
        with pytest.raises(PydanticValidationError):
            AuthorRef(kind=ActorKind.ANONYMOUS, user_id=UserId(uuid4()))


class TestUsername:
    """Tests for Username."""

    @pytest.mark.parametrize("value", ["abc", "quiet_fox", "luna.listens", "a-b-c"])
    def test_valid(self, value):
        assert Username(value).root == value

    @pytest.mark.parametrize("value", ["ab", "has space", "x" * 31, "emoji🙂"])
    def test_invalid(self, value):
        with pytest.raises(PydanticValidationError):
            Username(value)

    def test_parse_reports_domain_error(self):
        with pytest.raises(ValidationError):
            Username.parse("no")
