"""Route views for the villa-rental manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Static

from ..navigation import HOME_OWNER, MANAGER, TENANT
from .base import RouteView


@dataclass(frozen=True)
class PropertySummary:
    property_id: str
    name: str
    location: str
    bedrooms: int
    nightly_rate: int
    status: str


SAMPLE_PROPERTIES: Tuple[PropertySummary, ...] = (
    PropertySummary("villa-101", "Palm Crescent Villa", "Palm Jumeirah", 5, 4200, "Listed"),
    PropertySummary("villa-204", "Hatta Mountain Retreat", "Hatta", 3, 1650, "Listed"),
    PropertySummary("villa-318", "Saadiyat Beach House", "Saadiyat Island", 4, 3100, "Draft"),
)
_PROPERTY_INDEX: Dict[str, PropertySummary] = {
    prop.property_id: prop for prop in SAMPLE_PROPERTIES
}


class LandingView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("Premium villa rentals across the UAE.")
        with Horizontal():
            yield Button("Browse properties", id="landing-browse", variant="primary")
            yield Button("Sign in", id="landing-sign-in")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "landing-browse":
            self.navigate("properties")
        elif event.button.id == "landing-sign-in":
            self.navigate("login")


class DashboardView(RouteView):
    def compose_body(self) -> ComposeResult:
        listed = sum(1 for prop in SAMPLE_PROPERTIES if prop.status == "Listed")
        yield Static(f"Listed properties: {listed}/{len(SAMPLE_PROPERTIES)}")
        yield Static("Upcoming check-ins: 2    Unread messages: 3")


class PropertiesView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield DataTable(id="properties-table", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one("#properties-table", DataTable)
        table.add_columns("Name", "Location", "Bedrooms", "Nightly (AED)", "Status")
        for prop in SAMPLE_PROPERTIES:
            table.add_row(
                prop.name,
                prop.location,
                str(prop.bedrooms),
                f"{prop.nightly_rate:,}",
                prop.status,
                key=prop.property_id,
            )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.navigate("property-view", {"id": event.row_key.value})


class PropertyDetailView(RouteView):
    def compose_body(self) -> ComposeResult:
        prop = _PROPERTY_INDEX.get(str(self.params.get("id", "")))
        if prop is None:
            yield Static("Property not found.", id="property-missing")
            return
        yield Static(f"[bold]{prop.name}[/bold] - {prop.location}", id="property-name")
        yield Static(
            f"{prop.bedrooms} bedrooms, AED {prop.nightly_rate:,} per night ({prop.status})"
        )
        yield Button("Back to properties", id="property-back")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "property-back":
            self.navigate("properties")


class ReservationsView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("No reservations need attention.")


class MyBookingsView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("You have no upcoming stays.")


class InboxView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("3 unread guest conversations.")


class ReviewsView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("Average rating 4.8 across 27 reviews.")


class FinanceView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("Next payout: AED 18,450 on the 1st.")


class SupportView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static(
            "Shortcuts: q quit, b back, ctrl+k command palette, h home, d dashboard."
        )


class LoginView(RouteView):
    """Demo sign-in: pick the account role to sign in with."""

    def compose_body(self) -> ComposeResult:
        with Horizontal():
            yield Button("Guest (Tenant)", id=f"sign-in-{TENANT}")
            yield Button("Owner (HomeOwner)", id=f"sign-in-{HOME_OWNER}")
            yield Button("Manager", id=f"sign-in-{MANAGER}", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("sign-in-"):
            return
        role = button_id[len("sign-in-"):]
        self.app.session.sign_in(f"demo-{role.lower()}", role)
        self.navigate(str(self.params.get("next") or "dashboard"))


class RegisterView(RouteView):
    def compose_body(self) -> ComposeResult:
        yield Static("Registration is handled by the Wezo web portal.")
        yield Button("Already have an account? Sign in", id="register-sign-in")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "register-sign-in":
            self.navigate("login")
