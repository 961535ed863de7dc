"""ModelClient — abstract base for remote multimodal model backends."""
from abc import ABC, abstractmethod
from typing import Optional

from xray_analyst.request import Part


class ModelClient(ABC):
    name: str = "model"

    @abstractmethod
    async def generate(self, parts: list[Part]) -> Optional[str]:
        """Submit prompt parts and return the model's text, or None when nothing came back.

        Raises RemoteServiceError, already tagged transient or permanent.
        """
        ...
