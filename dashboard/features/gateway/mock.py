from __future__ import annotations

from .types import AgentDescriptor, AgentType, Collection

MOCK_COLLECTIONS: tuple[Collection, ...] = (
    Collection(name="Default Collection", path="/collections/default", is_default=True),
    Collection(name="Product Documentation", path="/collections/products", is_default=False),
    Collection(name="Customer Support", path="/collections/support", is_default=False),
)


class MockAgentStore:
    """In-memory stand-in for the agent manager's running-agent table.

    One entry per user id; starting again replaces the previous entry.
    """

    def __init__(self) -> None:
        self._agents: dict[str, AgentDescriptor] = {}

    def start(self, user_id: str, agent_type: AgentType) -> AgentDescriptor:
        descriptor = AgentDescriptor(user_id=user_id, agent_type=agent_type, running_time=0)
        self._agents[user_id] = descriptor
        return descriptor

    def stop(self, user_id: str) -> bool:
        return self._agents.pop(user_id, None) is not None

    def list(self) -> list[AgentDescriptor]:
        return [agent.model_copy() for agent in self._agents.values()]

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)


def mock_collections() -> list[Collection]:
    return [collection.model_copy() for collection in MOCK_COLLECTIONS]
