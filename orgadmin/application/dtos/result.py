"""ServiceResult: the typed outcome every application service returns.

Services raise domain exceptions inside their unit of work. The
service_operation decorator sits outside the transaction, so by the time
it sees an exception the unit of work has already rolled back; it then
turns the failure into a ServiceResult carrying an ErrorKind instead of
letting it escape.

    @service_operation
    async def get_role(self, role_id: int) -> RoleResult:
        async with self._uow.read() as session:
            ...

    result = await service.get_role(1)
    if not result.ok:
        ...  # result.error is ErrorKind.NOT_FOUND, etc.

Cancellation (asyncio.CancelledError) is never converted.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from orgadmin.domain.enums import ErrorKind
from orgadmin.domain.exceptions import (
    AdminCoreException,
    ConcurrencyConflictException,
    ConflictException,
    StorageUnavailableException,
)
from orgadmin.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Success with a value, or failure with an ErrorKind and a message."""

    ok: bool
    value: T | None = None
    error: ErrorKind | None = None
    error_code: str | None = None
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, value: T) -> ServiceResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        message: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> ServiceResult[T]:
        return cls(
            ok=False,
            error=error,
            error_code=error_code,
            message=message,
            details=details or {},
        )

    @classmethod
    def from_exception(cls, exc: AdminCoreException) -> ServiceResult[T]:
        return cls.failure(
            exc.kind, exc.message, error_code=exc.error_code, details=exc.details
        )

    def unwrap(self) -> T:
        """Return the value of a successful result.

        Raises:
            FailedResultError: If the result is a failure (same kind, code and details).
        """
        if not self.ok:
            raise FailedResultError(self)
        return self.value  # type: ignore[return-value]


class FailedResultError(AdminCoreException):
    """A failed ServiceResult turned back into an exception (e.g. at the HTTP edge)."""

    def __init__(self, result: ServiceResult[Any]) -> None:
        super().__init__(result.message or "", result.error_code, result.details)
        self.kind = result.error or ErrorKind.VALIDATION_FAILED
        self.result = result


def _to_domain_exception(exc: Exception) -> AdminCoreException | None:
    """Map storage errors to domain exceptions; None if the error is not ours to convert."""
    if isinstance(exc, AdminCoreException):
        return exc
    if isinstance(exc, StaleDataError):
        return ConcurrencyConflictException()
    if isinstance(exc, IntegrityError):
        return ConflictException(
            "Write conflicts with existing data", "INTEGRITY_CONFLICT"
        )
    if isinstance(exc, (OperationalError, InterfaceError)):
        return StorageUnavailableException()
    if isinstance(exc, TimeoutError):
        return StorageUnavailableException("Unit of work timed out")
    return None


def service_operation(
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[ServiceResult[T]]]:
    """Wrap an async service method so it returns ServiceResult[T]."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> ServiceResult[T]:
        try:
            value = await func(*args, **kwargs)
        except Exception as exc:
            domain_exc = _to_domain_exception(exc)
            if domain_exc is None:
                raise
            if domain_exc.kind is ErrorKind.UNAVAILABLE:
                logger.error(
                    "%s failed: %s", func.__qualname__, domain_exc.message, exc_info=exc
                )
            else:
                logger.warning(
                    "%s failed (%s): %s",
                    func.__qualname__,
                    domain_exc.error_code,
                    domain_exc.message,
                )
            return ServiceResult.from_exception(domain_exc)
        return ServiceResult.success(value)

    return wrapper
