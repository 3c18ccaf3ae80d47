"""Route views mounted by the Wezo shell."""

from .base import RouteView
from .pages import (
    DashboardView,
    FinanceView,
    InboxView,
    LandingView,
    LoginView,
    MyBookingsView,
    PropertiesView,
    PropertyDetailView,
    RegisterView,
    ReservationsView,
    ReviewsView,
    SupportView,
)

__all__ = [
    "DashboardView",
    "FinanceView",
    "InboxView",
    "LandingView",
    "LoginView",
    "MyBookingsView",
    "PropertiesView",
    "PropertyDetailView",
    "RegisterView",
    "ReservationsView",
    "ReviewsView",
    "RouteView",
    "SupportView",
]
