from abc import ABC, abstractmethod

from iam.app.repositories.user_repository import IUserRepository
from iam.app.repositories.workspace_repository import IWorkspaceRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management

    Leaving the context without commit rolls back everything flushed inside it.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    workspaces: IWorkspaceRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
