# accounting/api/filters.py

import django_filters

from accounting.models.journal import JournalEntry


class JournalEntryFilter(django_filters.FilterSet):
    """
    /api/accounting/journal-entries/?reference=INV-12
    /api/accounting/journal-entries/?reference_prefix=ORDER-
    /api/accounting/journal-entries/?date_from=2025-01-01&date_to=2025-01-31
    """

    reference = django_filters.CharFilter(field_name="reference", lookup_expr="exact")
    reference_prefix = django_filters.CharFilter(field_name="reference", lookup_expr="startswith")
    status = django_filters.ChoiceFilter(choices=JournalEntry.STATUSES)
    date_from = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")
    account = django_filters.CharFilter(field_name="lines__account__code", distinct=True)

    class Meta:
        model = JournalEntry
        fields = ["reference", "status"]
