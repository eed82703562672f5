from typing import List

from common.core.constants import ExecutionMemoKey, ExecutionSearchAttribute
from common.providers.orchestration import And, Eq, In, Predicate
from packages.executions.models.domain.query import QueryCriteria
from packages.executions.utils.status import normalize_status


def build_predicate(criteria: QueryCriteria) -> Predicate:
    """Combine the supplied criteria with AND, tenant first.

    A single agent becomes an equality; an agent set becomes membership.
    Empty or missing criteria contribute nothing.
    """
    clauses: List[Predicate] = [
        Eq(ExecutionMemoKey.TENANT_ID.value, criteria.tenant_id)
    ]

    if criteria.agent_name:
        clauses.append(Eq(ExecutionMemoKey.AGENT.value, criteria.agent_name))
    elif len(criteria.agent_names) == 1:
        clauses.append(Eq(ExecutionMemoKey.AGENT.value, criteria.agent_names[0]))
    elif criteria.agent_names:
        clauses.append(In(ExecutionMemoKey.AGENT.value, tuple(criteria.agent_names)))

    status = normalize_status(criteria.status) if criteria.status else None
    if status:
        clauses.append(Eq(ExecutionSearchAttribute.EXECUTION_STATUS.value, status))

    if criteria.workflow_type:
        clauses.append(
            Eq(ExecutionSearchAttribute.WORKFLOW_TYPE.value, criteria.workflow_type)
        )

    if criteria.owner:
        clauses.append(Eq(ExecutionMemoKey.USER_ID.value, criteria.owner))

    if criteria.id_postfix:
        clauses.append(Eq(ExecutionMemoKey.ID_POSTFIX.value, criteria.id_postfix))

    return And(tuple(clauses))
