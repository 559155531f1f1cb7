from abc import ABC, abstractmethod
from typing import Any, Dict

WORKSPACE_CREATED = "workspace.created"
USER_CREATED = "user.created"
USER_LOGIN = "user.login"

SOURCE_SERVICE_IAM = "iam_service"


class IEventPublisher(ABC):
    """Domain event sink. publish() raises on failure."""

    @abstractmethod
    async def publish(self, topic: str, payload: Dict[str, Any]) -> None:
        pass


class IEventBus(ABC):
    """Non-blocking hand-off used by use cases; never raises to the caller"""

    @abstractmethod
    def dispatch(self, topic: str, payload: Dict[str, Any]) -> None:
        pass
