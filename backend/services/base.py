"""
Base service class
"""

from abc import ABC, abstractmethod


class BaseService(ABC):
    """
    Services orchestrate domain components (embedding, strategies, LLMs, stores)
    and close the provider clients they create.
    """

    @abstractmethod
    async def close(self) -> None:
        """Release clients owned by the service"""
        pass
