"""Request validation: declarative validators and the behavior that runs them.

A ``Validator`` declares rules per field::

    class CreateUserCommandValidator(Validator[CreateUserCommand]):
        def __init__(self) -> None:
            super().__init__()
            self.rule_for("Name", lambda c: c.name).not_empty()

Rules can be grouped into named rule sets; ``validate`` runs every set
unless told otherwise and reports which sets it ran.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar

from email_validator import EmailNotValidError, validate_email

from ums.mediation.behavior import NextHandler, PipelineBehavior
from ums.mediation.cancellation import CancellationToken
from ums.mediation.exceptions import ValidationError
from ums.mediation.request import Request

TRequest = TypeVar("TRequest", bound=Request)

DEFAULT_RULE_SET = "default"


@dataclass(frozen=True)
class ValidationFailure:
    """A single rule that a request field did not satisfy."""

    field: str
    rule: str
    message: str
    attempted_value: Any = None

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    failures: list[ValidationFailure] = field(default_factory=list)
    rule_sets_executed: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class _Check:
    rule: str
    predicate: Callable[[Any], bool]
    message: str


def _is_not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    try:
        return len(value) > 0
    except TypeError:
        return True


def _is_email_address(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class RuleBuilder:
    """Checks attached to one field. Every check runs; failures keep declaration order."""

    def __init__(
        self,
        field_name: str,
        accessor: Callable[[Any], Any],
        rule_set: str,
    ) -> None:
        self.field_name = field_name
        self.rule_set = rule_set
        self._accessor = accessor
        self._checks: list[_Check] = []

    def not_empty(self) -> RuleBuilder:
        return self._add("NotEmpty", _is_not_empty, "'{field}' must not be empty.")

    def max_length(self, limit: int) -> RuleBuilder:
        return self._add(
            "MaximumLength",
            lambda v: v is None or len(v) <= limit,
            "'{field}' must be %d characters or fewer." % limit,
        )

    def email_address(self) -> RuleBuilder:
        # Empty values are left to not_empty().
        return self._add(
            "EmailAddress",
            lambda v: not v or _is_email_address(v),
            "'{field}' is not a valid email address.",
        )

    def greater_than(self, bound: Any) -> RuleBuilder:
        return self._add(
            "GreaterThan",
            lambda v: v is not None and v > bound,
            "'{field}' must be greater than %s." % bound,
        )

    def must(
        self,
        predicate: Callable[[Any], bool],
        rule: str = "Predicate",
        message: str = "The specified condition was not met for '{field}'.",
    ) -> RuleBuilder:
        return self._add(rule, predicate, message)

    def evaluate(self, request: Any) -> list[ValidationFailure]:
        value = self._accessor(request)
        return [
            ValidationFailure(
                field=self.field_name,
                rule=check.rule,
                message=check.message.format(field=self.field_name),
                attempted_value=value,
            )
            for check in self._checks
            if not check.predicate(value)
        ]

    def _add(self, rule: str, predicate: Callable[[Any], bool], message: str) -> RuleBuilder:
        self._checks.append(_Check(rule, predicate, message))
        return self


class Validator(Generic[TRequest]):
    """Base class for the validators of one request type."""

    def __init__(self) -> None:
        self._rules: list[RuleBuilder] = []

    def rule_for(
        self,
        field_name: str,
        accessor: Callable[[TRequest], Any],
        rule_set: str = DEFAULT_RULE_SET,
    ) -> RuleBuilder:
        builder = RuleBuilder(field_name, accessor, rule_set)
        self._rules.append(builder)
        return builder

    @property
    def rule_sets(self) -> tuple[str, ...]:
        """Declared rule set names, in first-declared order."""
        return tuple(dict.fromkeys(rule.rule_set for rule in self._rules))

    def validate(
        self,
        request: TRequest,
        rule_sets: Iterable[str] | None = None,
    ) -> ValidationResult:
        selected = self.rule_sets if rule_sets is None else tuple(dict.fromkeys(rule_sets))
        failures: list[ValidationFailure] = []
        for rule in self._rules:
            if rule.rule_set in selected:
                failures.extend(rule.evaluate(request))
        return ValidationResult(failures=failures, rule_sets_executed=selected)


class ValidationBehavior(PipelineBehavior):
    """Runs the validators registered for a request's exact type.

    All validators run, even after one has failed, so the caller gets the
    complete list of failures. Any failure stops the pipeline before the
    handler.
    """

    def __init__(self) -> None:
        self._validators: dict[type, list[Validator]] = {}

    def register(self, request_type: type[Request], validator: Validator) -> None:
        self._validators.setdefault(request_type, []).append(validator)

    def validators_for(self, request_type: type[Request]) -> tuple[Validator, ...]:
        return tuple(self._validators.get(request_type, ()))

    def handle(
        self,
        request: Request,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> Any:
        validators = self._validators.get(type(request))
        if not validators:
            return next_handler()

        failures: list[ValidationFailure] = []
        executed: dict[str, None] = {}
        for validator in validators:
            cancellation.raise_if_cancelled()
            result = validator.validate(request)
            failures.extend(result.failures)
            executed.update(dict.fromkeys(result.rule_sets_executed))

        if failures:
            raise ValidationError(request, failures, tuple(executed))
        return next_handler()
