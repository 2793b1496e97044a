"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising. Callers branch
on the variant with structural pattern matching, so every failure path is
visible at the call site.

Usage:
    async def get_rule(rule_id: str) -> Result[RateLimitRule, RuleError]:
        rule = await repository.find_by_id(rule_id)
        if rule is None:
            return Failure(error=RuleNotFoundError.for_rule(rule_id))
        return Success(value=rule)

    match await get_rule("login-per-ip"):
        case Success(value=rule):
            print(rule.name)
        case Failure(error=error):
            print(error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
