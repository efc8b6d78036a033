# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

# Import directly to avoid circular imports through views/__init__.py.
from accounting.api.view import JournalEntryViewSet
from accounting.api.views.accounts import ChartAccountsView

router = DefaultRouter()
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")

urlpatterns = [
    path("accounts/", ChartAccountsView.as_view(), name="accounts"),
    path("", include(router.urls)),
]
