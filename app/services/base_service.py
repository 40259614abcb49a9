from typing import Any
from abc import ABC, abstractmethod

from app.core.exceptions import AppError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base class for application services.

    ``execute`` validates input, runs the service and converts unexpected
    exceptions into ``AppError`` so routes only handle one error family.
    """

    def __init__(self):
        self.logger = LOGGER

    async def execute(self, *args, **kwargs) -> Any:
        """Validate input, then run the service logic.

        Raises:
            AppError: If validation or execution fails
        """
        try:
            self.validate(*args, **kwargs)
            return await self.run(*args, **kwargs)

        except AppError:
            raise

        except Exception as e:
            self.logger.error(
                f"Service execution failed: {str(e)}",
                exc_info=True,
                extra={"service": self.__class__.__name__}
            )
            raise AppError(f"Service execution failed: {str(e)}", original_error=e) from e

    def validate(self, *args, **kwargs) -> None:
        """Validate service input.

        Raises:
            ValidationError: If input is invalid
        """
        pass

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Run the core service logic."""
        pass
