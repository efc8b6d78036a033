# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS (READ-ONLY / AUDIT SAFE)

- Journal entries are append-only: no create / update / delete over HTTP
- Permission-gated via Django permissions (no role hardcoding)
- Filtering through django-filter (see accounting/api/filters.py)
"""

from django.db.models import Prefetch
from drf_spectacular.utils import extend_schema
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet

from accounting.api.filters import JournalEntryFilter
from accounting.api.serializers import JournalEntrySerializer
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(ReadOnlyModelViewSet):
    """
    Read-only access to journal entries with their lines.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = JournalEntrySerializer
    filterset_class = JournalEntryFilter
    http_method_names = ["get", "head", "options"]

    queryset = JournalEntry.objects.prefetch_related(
        Prefetch("lines", queryset=JournalEntryLine.objects.select_related("account"))
    ).order_by("-entry_date", "-id")

    def get_queryset(self):
        if not self.request.user.has_perm("accounting.view_journalentry"):
            raise PermissionDenied("You do not have permission to view journal entries.")
        return super().get_queryset()
