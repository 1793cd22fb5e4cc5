"""Tests for ValidationBehavior inside a Mediator pipeline."""

import pytest

from tests.fakes import (
    CancellingValidator,
    LoudPing,
    Ping,
    PingHandler,
    RecordingBehavior,
    StaticValidator,
    failure,
)
from ums.mediation.cancellation import CancellationToken
from ums.mediation.exceptions import OperationCancelled, ValidationError
from ums.mediation.mediator import Mediator
from ums.mediation.validation import ValidationBehavior


def _setup(*validators: StaticValidator) -> tuple[Mediator, PingHandler, ValidationBehavior]:
    handler = PingHandler()
    validation = ValidationBehavior()
    for validator in validators:
        validation.register(Ping, validator)
    mediator = Mediator()
    mediator.register_handler(handler)
    mediator.add_behavior(validation)
    return mediator, handler, validation


class TestPassThrough:

    def test_no_validators_invokes_handler(self):
        mediator, handler, _ = _setup()
        assert mediator.send(Ping("a")) == "pong:a"
        assert len(handler.calls) == 1

    def test_validators_of_other_types_are_ignored(self):
        handler = PingHandler()
        validation = ValidationBehavior()
        validation.register(LoudPing, StaticValidator(failure("Message")))
        mediator = Mediator()
        mediator.register_handler(handler)
        mediator.add_behavior(validation)

        assert mediator.send(Ping("a")) == "pong:a"


class TestAllValidatorsPass:

    def test_handler_invoked_once_with_result_unchanged(self):
        first, second = StaticValidator(), StaticValidator()
        mediator, handler, _ = _setup(first, second)

        assert mediator.send(Ping("ok")) == "pong:ok"
        assert handler.calls == [Ping("ok")]
        assert (first.calls, second.calls) == (1, 1)


class TestFailures:

    def test_single_failure_blocks_handler(self):
        mediator, handler, _ = _setup(StaticValidator(failure("Message")))

        with pytest.raises(ValidationError) as exc_info:
            mediator.send(Ping(""))

        assert handler.calls == []
        assert [f.field for f in exc_info.value.failures] == ["Message"]
        assert exc_info.value.request == Ping("")

    def test_failures_concatenated_in_validator_order(self):
        a1, a2, b1 = failure("A", "NotEmpty"), failure("A", "MaximumLength"), failure("B")
        first = StaticValidator(a1, a2)
        passing = StaticValidator()
        last = StaticValidator(b1)
        mediator, handler, _ = _setup(first, passing, last)

        with pytest.raises(ValidationError) as exc_info:
            mediator.send(Ping())

        assert exc_info.value.failures == [a1, a2, b1]
        assert handler.calls == []

    def test_every_validator_runs_after_a_failure(self):
        failing = StaticValidator(failure("A"))
        later = StaticValidator()
        mediator, _, _ = _setup(failing, later)

        with pytest.raises(ValidationError):
            mediator.send(Ping())
        assert later.calls == 1

    def test_one_failing_validator_among_passing_ones_blocks(self):
        mediator, handler, _ = _setup(StaticValidator(), StaticValidator(failure("A")), StaticValidator())
        with pytest.raises(ValidationError):
            mediator.send(Ping())
        assert handler.calls == []

    def test_rule_sets_executed_are_merged_in_first_seen_order(self):
        mediator, _, _ = _setup(
            StaticValidator(failure("A"), rule_set="create"),
            StaticValidator(rule_set="default"),
            StaticValidator(failure("B"), rule_set="create"),
        )
        with pytest.raises(ValidationError) as exc_info:
            mediator.send(Ping())
        assert exc_info.value.rule_sets_executed == ("create", "default")

    def test_later_behaviors_do_not_run(self):
        log: list[str] = []
        mediator, _, _ = _setup(StaticValidator(failure("A")))
        mediator.add_behavior(RecordingBehavior("after-validation", log))

        with pytest.raises(ValidationError):
            mediator.send(Ping())
        assert log == []


class TestRegistry:

    def test_validators_kept_in_registration_order(self):
        first, second = StaticValidator(), StaticValidator()
        _, _, validation = _setup(first, second)
        assert validation.validators_for(Ping) == (first, second)
        assert validation.validators_for(LoudPing) == ()


class TestCancellation:

    def test_checked_before_each_validator(self):
        validator = StaticValidator()
        token = CancellationToken()
        validation = ValidationBehavior()
        validation.register(Ping, validator)
        token.cancel()

        with pytest.raises(OperationCancelled):
            validation.handle(Ping(), lambda: "unreachable", token)
        assert validator.calls == 0

    def test_cancelled_between_validators(self):
        token = CancellationToken()
        first = CancellingValidator(token)
        second = StaticValidator()
        mediator, handler, _ = _setup(first, second)

        with pytest.raises(OperationCancelled):
            mediator.send(Ping(), cancellation=token)

        assert first.calls == 1
        assert second.calls == 0
        assert handler.calls == []
