"""Profile flow definitions, keyed by URL name."""

from nexus.core.errors import NotFoundError
from nexus.wizard.flow import FlowDefinition
from nexus.wizard.flows.company import COMPANY_FLOW
from nexus.wizard.flows.personal import PERSONAL_FLOW
from nexus.wizard.flows.professional import PROFESSIONAL_FLOW

FLOWS: dict[str, FlowDefinition] = {
    flow.name: flow for flow in (PERSONAL_FLOW, PROFESSIONAL_FLOW, COMPANY_FLOW)
}


def get_flow(name: str) -> FlowDefinition:
    """Look up a flow by name.

    Raises:
        NotFoundError: If no flow has that name.
    """
    flow = FLOWS.get(name)
    if flow is None:
        raise NotFoundError("Profile flow", name)
    return flow


__all__ = ["COMPANY_FLOW", "FLOWS", "PERSONAL_FLOW", "PROFESSIONAL_FLOW", "get_flow"]
