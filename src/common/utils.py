import typing as t

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

T = t.TypeVar("T", bound=models.Model)


def get_or_create_with_race_protection(
    model: type[T],
    lookup_filter: models.Q,
    defaults: dict[str, t.Any],
) -> tuple[T, bool]:
    """Get or create a model instance with protection against race conditions.

    Attempts to retrieve an instance matching the lookup filter. If not found,
    creates one using the defaults. Handles the IntegrityError (or the unique-constraint
    ValidationError raised by full_clean) from race conditions by retrying the lookup.

    The create runs inside a savepoint so that losing the race does not break
    an enclosing transaction.

    Args:
        model: The Django model class
        lookup_filter: Q object for filtering the lookup
        defaults: Dictionary of field values for creating the instance

    Returns:
        Tuple of (instance, created) where created is True if the instance was created

    Example:
        gate_state, created = get_or_create_with_race_protection(
            EnrollmentGateState,
            Q(learner_id="42", course_id="python-101"),
            {"learner_id": "42", "course_id": "python-101"},
        )
    """
    manager: models.Manager[T] = getattr(model, "objects")
    instance = manager.filter(lookup_filter).first()
    if instance:
        return instance, False

    try:
        with transaction.atomic():
            return manager.create(**defaults), True
    except (IntegrityError, ValidationError):
        # Race condition: another request created it between our check and create
        instance = manager.filter(lookup_filter).first()
        if not instance:
            # Should never happen, but if it does, re-raise the original error
            raise
        return instance, False
