from abc import ABC, abstractmethod
from typing import Any


class AbstractMatchServiceClient(ABC):
    """Interface for clients that submit one analysis to the match service."""

    @abstractmethod
    async def analyze(self, resume: str, job_description: str) -> dict[str, Any]:
        """Submit a resume/job description pair and return the raw result body.

        Args:
            resume: Resume text, sent as-is.
            job_description: Job description text, sent as ``job_description``.

        Returns:
            dict[str, Any]: Decoded JSON object of a success response.

        Raises:
            ServiceAppError: If the service answered with a non-success status.
            TransportAppError: If the call could not complete or the body is not a JSON object.
        """
        ...

    async def aclose(self) -> None:
        """Release any underlying connection resources."""
        return None
