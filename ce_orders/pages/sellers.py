"""Sellers page — payout entry and edit form, payout ledger with mark-paid, payout KPIs."""
from dash import html
import dash_bootstrap_components as dbc

from ce_orders.theme import *
from ce_orders.components.kpi import kpi_pill, kpi_strip, money_pill
from ce_orders.components.cards import section, empty_note
from ce_orders.analytics import compute_earning_stats, filter_earnings
from ce_orders.finance import money
from ce_orders.models import EARNING_STATUSES, now_local, to_local
from ce_orders import data_state as ds


def earning_kpis(earnings):
    stats = compute_earning_stats(earnings)
    return kpi_strip([
        kpi_pill("#", "Sellers", str(stats.total_sellers), BLUE),
        money_pill("!", "Unpaid", stats.unpaid_balance, ORANGE, f"{stats.unpaid_count} entries"),
        money_pill("✓", "Paid", stats.paid_balance, GREEN, f"{stats.paid_count} entries"),
        money_pill("₹", "Total Payout", stats.total_payout, CYAN),
    ])


def payout_form_values(record=None):
    """Payout form values: blank for a new payout, the record's values when editing."""
    if record is None:
        return {
            "seller_name": "", "payout_amount": None, "status": "Unpaid",
            "date": now_local().strftime("%Y-%m-%dT%H:%M"), "notes": "",
        }
    return {
        "seller_name": record.seller_name,
        "payout_amount": record.payout_amount,
        "status": record.status,
        "date": to_local(record.date).strftime("%Y-%m-%dT%H:%M") if record.date else "",
        "notes": record.notes,
    }


def form_controls(editing):
    """(submit label, cancel button style) for the current edit state."""
    if editing:
        return "Update Payout", {}
    return "Add Payout", {"display": "none"}


def earnings_table(earnings):
    if not earnings:
        return empty_note("No payouts in this view.")
    rows = []
    for e in earnings:
        rows.append(html.Tr([
            html.Td(to_local(e.date).strftime("%d %b %Y") if e.date else "",
                    style={"color": GRAY, "fontSize": "12px"}),
            html.Td([
                html.Div(e.seller_name, style={"color": WHITE, "fontWeight": "600", "fontSize": "13px"}),
                html.Div(e.notes, style={"color": DARKGRAY, "fontSize": "11px"}) if e.notes else None,
            ]),
            html.Td(money(e.payout_amount), style={"fontFamily": "monospace", "textAlign": "right",
                                                   "color": STATUS_COLORS.get(e.status, WHITE)}),
            html.Td(dbc.Badge(e.status, color="success" if e.status == "Paid" else "warning")),
            html.Td([
                dbc.Button("Mark Paid", id={"type": "earning-paid", "index": e.id}, size="sm",
                           color="success", className="me-1", disabled=e.status == "Paid"),
                dbc.Button("Edit", id={"type": "earning-edit", "index": e.id}, size="sm",
                           color="info", outline=True, className="me-1"),
                dbc.Button("Delete", id={"type": "earning-delete", "index": e.id}, size="sm",
                           color="danger", outline=True),
            ], style={"whiteSpace": "nowrap", "textAlign": "right"}),
        ]))
    return dbc.Table([
        html.Thead(html.Tr([html.Th("Date"), html.Th("Seller"),
                            html.Th("Payout", style={"textAlign": "right"}),
                            html.Th("Status"), html.Th("")])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def render_earnings(term="", status_filter="unpaid"):
    earnings = ds.get_state().list_earnings()
    shown = filter_earnings(earnings, term, status_filter)
    return [
        earning_kpis(earnings),
        section("Payouts", earnings_table(shown), ORANGE, badge=len(shown)),
    ]


def layout():
    """Build the Sellers page; the payout form is prefilled while a payout is being edited."""
    state = ds.get_state()
    editing = state.get_earning(state.earning_edit.editing_id) if state.earning_edit.is_editing else None
    values = payout_form_values(editing)
    submit_label, cancel_style = form_controls(editing is not None)

    form = section("Payout", dbc.Row([
        dbc.Col(dbc.Input(id="earning-seller", placeholder="Seller name", value=values["seller_name"]),
                md=4, className="mb-2"),
        dbc.Col(dbc.Input(id="earning-amount", type="number", min=0, step="any", placeholder="Payout",
                          value=values["payout_amount"]), md=2, className="mb-2"),
        dbc.Col(dbc.Select(id="earning-status", value=values["status"],
                           options=[{"label": s, "value": s} for s in EARNING_STATUSES]),
                md=2, className="mb-2"),
        dbc.Col(dbc.Input(id="earning-date", type="datetime-local", value=values["date"]),
                md=4, className="mb-2"),
        dbc.Col(dbc.Textarea(id="earning-notes", placeholder="Notes", rows=1, value=values["notes"]), md=6),
        dbc.Col(dbc.Button("Cancel", id="earning-cancel-btn", color="secondary", outline=True,
                           className="w-100", style=cancel_style), md=3),
        dbc.Col(dbc.Button(submit_label, id="earning-submit-btn", color="success", className="w-100"),
                md=3),
    ]), GREEN)

    filters = dbc.Row([
        dbc.Col(dbc.Input(id="earning-search", placeholder="Search seller", debounce=True), md=8),
        dbc.Col(dbc.RadioItems(id="earning-filter", value="unpaid", inline=True,
                               options=[{"label": "All", "value": "all"},
                                        {"label": "Unpaid", "value": "unpaid"},
                                        {"label": "Paid", "value": "paid"}]), md=4),
    ], className="mb-2")

    return html.Div([
        form,
        filters,
        html.Div(render_earnings(), id="earning-body"),
        html.Div(id="earning-toast"),
    ])
