"""Tests for the in-memory repositories' query helpers."""

import pytest

from tests.conftest import add_admin, add_message
from tests.harness import create_env_fixture
from whisper.domain.repository import AdminRepository, MessageRepository

unit_env = create_env_fixture()


class TestReaddressPrivate:
    @pytest.mark.asyncio
    async def test_only_private_messages_move(self, unit_env):
        repo = await unit_env.get(MessageRepository)
        pending = await add_message(unit_env, is_public=False, recipient="Luna")
        other = await add_message(unit_env, is_public=False, recipient="Sol")

        moved = await repo.readdress_private("Luna", "Selene")

        assert moved == 1
        assert (await repo.find_by_id(pending.id)).recipient == "Selene"
        assert (await repo.find_by_id(other.id)).recipient == "Sol"
        assert await repo.count_private_by_recipient("Selene") == 1
        assert await repo.count_private_by_recipient("Luna") == 0


class TestAdminSearch:
    @pytest.mark.asyncio
    async def test_limit_applies(self, unit_env):
        repo = await unit_env.get(AdminRepository)
        for name in ("Luna", "Lune", "Lunette"):
            await add_admin(unit_env, username=f"{name.lower()}_x", display_name=name)

        found = await repo.search("lun", limit=2)

        assert len(found) == 2
