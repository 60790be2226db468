"""
Base use case class following Clean Architecture principles.

Each use case encapsulates a single business operation and is independent
of HTTP details: it takes a request object, returns a result object and
raises domain exceptions (TopicValidationError, StageError, ...). Routes
translate those into HTTP responses.

Example:
    >>> class ImageAlchemyUseCase(UseCase[ImageAlchemyRequest, ImageAlchemyResult]):
    ...     async def execute(self, request: ImageAlchemyRequest) -> ImageAlchemyResult:
    ...         ...
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Base use case abstract class.

    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            Domain exceptions only. HTTP exceptions are the route's concern.
        """
