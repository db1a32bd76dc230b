"""Best-effort sagas over the entity store.

Form/review/user writes span several collections and MongoDB gives no
multi-document atomicity on a standalone server. A saga runs the writes in
a fixed order; when one fails the earlier ones stay applied, the failure is
logged with its step index and surfaced as an InternalError.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar
import logging

from developeer.errors import DeveloperError, InternalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Saga:
    """Ordered sequence of independently durable steps."""

    def __init__(self, name: str, **context: Any):
        self.name = name
        self.context: Dict[str, Any] = context
        self.completed: List[str] = []

    @property
    def current_step(self) -> int:
        return len(self.completed) + 1

    async def step(
        self,
        description: str,
        operation: Awaitable[T],
        expect: Optional[Callable[[T], bool]] = None,
        reason: str = "write matched nothing",
    ) -> T:
        """Await one step. Domain errors pass through untouched.

        ``expect`` checks the result; a falsy check fails the step with
        ``reason`` before it is counted as completed.
        """
        index = self.current_step
        try:
            result = await operation
        except DeveloperError:
            raise
        except Exception as e:
            self._log_failure(index, description, e)
            raise InternalError(
                f"{self.name} failed at step {index} ({description})",
                step=index,
            ) from e

        if expect is not None and not expect(result):
            raise self.fail(description, reason)

        self.completed.append(description)
        return result

    def fail(self, description: str, reason: str) -> InternalError:
        """Build the error for the step that has not completed yet."""
        index = self.current_step
        self._log_failure(index, description, reason)
        return InternalError(
            f"{self.name} failed at step {index} ({description}): {reason}",
            step=index,
        )

    def _log_failure(self, index: int, description: str, error: Any) -> None:
        logger.error(
            "Saga %s failed at step %d (%s): %s. Completed steps: %s. Context: %s",
            self.name,
            index,
            description,
            error,
            self.completed or "none",
            self.context,
        )
