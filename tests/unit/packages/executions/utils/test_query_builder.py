from common.providers.orchestration import render
from packages.executions.models.domain.query import QueryCriteria
from packages.executions.utils.query_builder import build_predicate


class TestBuildPredicate:
    def test_tenant_only(self):
        predicate = build_predicate(QueryCriteria(tenant_id="acme"))
        assert render(predicate) == "tenantId = 'acme'"

    def test_tenant_is_always_first(self):
        predicate = build_predicate(
            QueryCriteria(
                tenant_id="acme",
                agent_name="router",
                status="running",
                workflow_type="Router",
                owner="user-1",
                id_postfix="nightly",
            )
        )
        assert render(predicate) == (
            "tenantId = 'acme' and agent = 'router' and ExecutionStatus = 'Running'"
            " and WorkflowType = 'Router' and userId = 'user-1' and idPostfix = 'nightly'"
        )

    def test_only_supplied_criteria_are_added(self):
        predicate = build_predicate(
            QueryCriteria(tenant_id="acme", workflow_type="Router", owner="")
        )
        assert render(predicate) == "tenantId = 'acme' and WorkflowType = 'Router'"

    def test_agent_set_renders_membership(self):
        predicate = build_predicate(
            QueryCriteria(tenant_id="acme", agent_names=["a", "b"])
        )
        assert render(predicate) == "tenantId = 'acme' and agent in ('a','b')"

    def test_single_agent_set_renders_equality(self):
        predicate = build_predicate(QueryCriteria(tenant_id="acme", agent_names=["a"]))
        assert render(predicate) == "tenantId = 'acme' and agent = 'a'"

    def test_unknown_status_is_kept_as_given(self):
        predicate = build_predicate(QueryCriteria(tenant_id="acme", status="Weird"))
        assert render(predicate) == "tenantId = 'acme' and ExecutionStatus = 'Weird'"
