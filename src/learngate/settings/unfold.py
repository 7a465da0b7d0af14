"""Django Unfold admin configuration."""

from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

from .base import VERSION

UNFOLD = {
    "SITE_TITLE": f"Learngate v{VERSION} Admin",
    "SITE_HEADER": f"Learngate v{VERSION} Administration",
    "SITE_URL": "/",
    "SHOW_HISTORY": True,
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Users"),
                "separator": False,
                "items": [
                    {
                        "title": _("Users"),
                        "icon": "person",
                        "link": reverse_lazy("admin:auth_user_changelist"),
                    },
                ],
            },
            {
                "title": _("Questionnaires"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Templates"),
                        "icon": "quiz",
                        "link": reverse_lazy("admin:questionnaires_questionnairetemplate_changelist"),
                    },
                    {
                        "title": _("Versions"),
                        "icon": "history",
                        "link": reverse_lazy("admin:questionnaires_questionnaireversion_changelist"),
                    },
                ],
            },
            {
                "title": _("Assignments"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Assignments"),
                        "icon": "assignment",
                        "link": reverse_lazy("admin:assignments_assignment_changelist"),
                    },
                    {
                        "title": _("Submissions"),
                        "icon": "task_alt",
                        "link": reverse_lazy("admin:assignments_assignmentsubmission_changelist"),
                    },
                    {
                        "title": _("Course Gates"),
                        "icon": "lock_open",
                        "link": reverse_lazy("admin:assignments_enrollmentgatestate_changelist"),
                    },
                    {
                        "title": _("Module Gates"),
                        "icon": "lock_open",
                        "link": reverse_lazy("admin:assignments_progressgatestate_changelist"),
                    },
                ],
            },
        ],
    },
}
