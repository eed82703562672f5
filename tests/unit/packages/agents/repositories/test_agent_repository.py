from packages.agents.models.domain.agent import PermissionLevel
from packages.agents.repositories.agent_repository import AgentRepository
from tests.fixtures import TENANT_A, TENANT_B


class TestAgentRepository:
    async def test_create_persists_permissions(self, sample_agents):
        agent_1, _, _ = sample_agents

        assert agent_1.id is not None
        assert {(p.user_id, p.level) for p in agent_1.permissions} == {
            ("user-1", PermissionLevel.READ),
            ("user-2", PermissionLevel.OWNER),
        }

    async def test_get_by_name_is_tenant_scoped(self, sample_agents):
        repo = AgentRepository()

        assert (await repo.get_by_name(TENANT_A, "agent-1")).name == "agent-1"
        assert await repo.get_by_name(TENANT_A, "agent-3") is None
        assert (await repo.get_by_name(TENANT_B, "agent-3")).tenant_id == TENANT_B

    async def test_list_names_by_tenant(self, sample_agents):
        assert await AgentRepository().list_names_by_tenant(TENANT_A) == ["agent-1", "agent-2"]

    async def test_list_names_accessible_by_user(self, sample_agents):
        repo = AgentRepository()

        assert await repo.list_names_accessible_by_user(TENANT_A, "user-1") == ["agent-1"]
        assert await repo.list_names_accessible_by_user(TENANT_A, "user-2") == [
            "agent-1",
            "agent-2",
        ]
        assert await repo.list_names_accessible_by_user(TENANT_B, "user-1") == ["agent-3"]
        assert await repo.list_names_accessible_by_user(TENANT_A, "nobody") == []

    async def test_list_by_names(self, sample_agents):
        agents = await AgentRepository().list_by_names(TENANT_A, ["agent-2", "agent-3", "x"])
        assert [a.name for a in agents] == ["agent-2"]

    async def test_explicit_session(self, test_db, sample_agents):
        agents = await AgentRepository(test_db).list_by_names(TENANT_B, ["agent-3"])
        assert [a.name for a in agents] == ["agent-3"]
