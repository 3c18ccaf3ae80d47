"""Route table for the villa-rental manager."""

from __future__ import annotations

from .navigation import HOME_OWNER, MANAGER, ROLES, TENANT, Route, RouteTable
from .views import (
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

OWNERS = (HOME_OWNER, MANAGER)

ROUTES = (
    Route("home", "Home", LandingView, icon="🏠", description="Premium villa rentals in the UAE."),
    Route(
        "dashboard",
        "Dashboard",
        DashboardView,
        icon="📊",
        description="Portfolio overview for owners and managers.",
        roles=OWNERS,
    ),
    Route(
        "properties",
        "Properties",
        PropertiesView,
        icon="🏢",
        description="Browse listed villas; select a row for details.",
    ),
    Route(
        "property-view",
        "Property Details",
        PropertyDetailView,
        icon="🏢",
        description="Listing details for a single villa.",
        show_in_nav=False,
        show_in_header=False,
        show_in_footer=False,
    ),
    Route(
        "reservations",
        "Reservations",
        ReservationsView,
        icon="📋",
        description="Bookings across your properties.",
        roles=OWNERS,
    ),
    Route(
        "my-bookings",
        "My Bookings",
        MyBookingsView,
        icon="🧳",
        description="Stays you have booked.",
        show_in_header=False,
        roles=(TENANT,),
    ),
    Route(
        "inbox",
        "Inbox",
        InboxView,
        icon="✉️",
        description="Guest and owner conversations.",
        roles=ROLES,
    ),
    Route(
        "reviews",
        "Reviews",
        ReviewsView,
        icon="⭐",
        description="Guest reviews and responses.",
        show_in_footer=False,
        roles=OWNERS,
    ),
    Route(
        "finance",
        "Finance",
        FinanceView,
        icon="💰",
        description="Payouts, fees and statements.",
        show_in_footer=False,
        roles=OWNERS,
    ),
    Route(
        "support",
        "Support",
        SupportView,
        icon="❓",
        description="Help and keyboard shortcuts.",
        show_in_header=False,
    ),
    Route(
        "login",
        "Sign In",
        LoginView,
        icon="🔑",
        description="Sign in to manage your villas.",
        show_in_nav=False,
        show_in_header=False,
        show_in_footer=False,
    ),
    Route(
        "register",
        "Register",
        RegisterView,
        icon="📝",
        description="Create a Wezo account.",
        show_in_nav=False,
        show_in_header=False,
        show_in_footer=False,
    ),
)

# Routes that ask for confirmation before they open.
CONFIRM_BEFORE_ENTERING = {
    "finance": "Finance shows payout and bank details. Open it now?",
}


def build_route_table() -> RouteTable:
    return RouteTable(ROUTES)
