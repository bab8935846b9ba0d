from collections.abc import Callable
from dataclasses import dataclass

from pdf_decomposer.decomposer.models import InputData


@dataclass(frozen=True)
class FixedPassword:
    """The same password for every document."""

    value: str


@dataclass(frozen=True)
class PasswordResolver:
    """Picks a password per document, e.g. by looking up data.uri."""

    resolve: Callable[[InputData], str | None]


PasswordPolicy = FixedPassword | PasswordResolver | None


def resolve_password(policy: PasswordPolicy, data: InputData) -> str | None:
    """Evaluate the policy for one decomposition attempt."""
    if isinstance(policy, PasswordResolver):
        return policy.resolve(data)
    if isinstance(policy, FixedPassword):
        return policy.value
    return None
