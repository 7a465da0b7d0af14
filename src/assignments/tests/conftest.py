import pytest
from django.contrib.auth.models import User

from assignments.models import Assignment
from assignments.service import resolver
from assignments.types import CourseScope, ModuleScope
from questionnaires.models import QuestionnaireTemplate

COURSE_ID = "python-101"
MODULE_ID = "functions"


@pytest.fixture
def course_scope() -> CourseScope:
    return CourseScope(course_id=COURSE_ID)


@pytest.fixture
def module_scope() -> ModuleScope:
    return ModuleScope(course_id=COURSE_ID, module_id=MODULE_ID)


@pytest.fixture
def learner_id(learner: User) -> str:
    return str(learner.pk)


@pytest.fixture
def pre_course_assignment(course_scope: CourseScope, quiz_template: QuestionnaireTemplate) -> Assignment:
    return resolver.create_assignment(course_scope, Assignment.Timing.PRE, quiz_template.id)


@pytest.fixture
def post_course_assignment(course_scope: CourseScope, quiz_template: QuestionnaireTemplate) -> Assignment:
    return resolver.create_assignment(course_scope, Assignment.Timing.POST, quiz_template.id)


@pytest.fixture
def pre_module_assignment(module_scope: ModuleScope, single_question_template: QuestionnaireTemplate) -> Assignment:
    return resolver.create_assignment(module_scope, Assignment.Timing.PRE, single_question_template.id)


@pytest.fixture
def post_module_assignment(module_scope: ModuleScope, quiz_template: QuestionnaireTemplate) -> Assignment:
    return resolver.create_assignment(module_scope, Assignment.Timing.POST, quiz_template.id)
