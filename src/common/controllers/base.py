import typing as t

import structlog
from django.contrib.auth.models import AbstractBaseUser
from ninja_extra import ControllerBase


class UserAwareController(ControllerBase):
    def user(self) -> AbstractBaseUser:
        """Get the user for this request."""
        return t.cast(AbstractBaseUser, self.context.request.user)  # type: ignore[union-attr]

    def learner_id(self) -> str:
        """The opaque learner identifier of the authenticated user.

        Also binds it to the structlog context, since JWT authentication happens
        after the request middleware ran.
        """
        learner_id = str(self.user().pk)
        structlog.contextvars.bind_contextvars(user_id=learner_id)
        return learner_id
