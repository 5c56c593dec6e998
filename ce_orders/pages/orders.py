"""Orders page — searchable ledger with edit/delete, CSV import and export."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from ce_orders.theme import *
from ce_orders.components.cards import section, empty_note
from ce_orders.finance import money
from ce_orders.analytics import search_orders, search_stats
from ce_orders.models import to_local
from ce_orders import data_state as ds


def search_summary(orders, term):
    stats = search_stats(orders, term)
    if stats is None:
        return None
    return html.Div([
        html.Span(f"{stats.count} match(es)", style={"color": CYAN, "fontWeight": "bold"}),
        html.Span(f"  ·  {money(stats.revenue)} collected", style={"color": GRAY}),
    ], style={"fontSize": "12px", "margin": "6px 0 10px 0"})


def orders_table(orders):
    """Table of orders, newest first, with per-row edit/delete buttons."""
    if not orders:
        return empty_note("No orders yet. Add one on the New Order page or import a CSV.")

    rows = []
    for o in orders:
        src_color = SOURCE_COLORS.get(o.order_source, GRAY)
        rows.append(html.Tr([
            html.Td(to_local(o.order_date).strftime("%d %b %Y %H:%M"),
                    style={"color": GRAY, "fontSize": "12px", "whiteSpace": "nowrap"}),
            html.Td([
                html.Div(o.customer_name, style={"color": WHITE, "fontWeight": "600", "fontSize": "13px"}),
                html.Div(f"#{o.order_number} · {o.category}", style={"color": DARKGRAY, "fontSize": "11px"}),
            ]),
            html.Td([
                html.Span("● ", style={"color": src_color}),
                html.Span(o.order_source, style={"fontSize": "12px"}),
                dbc.Badge("Potential", color="warning", className="ms-2") if o.is_potential else None,
            ]),
            html.Td(money(o.total_amount_paid), style={"fontFamily": "monospace", "textAlign": "right",
                                                      "color": GREEN}),
            html.Td(money(o.seller_income), style={"fontFamily": "monospace", "textAlign": "right",
                                                  "fontSize": "12px"}),
            html.Td([
                dbc.Button("Edit", id={"type": "order-edit", "index": o.id}, size="sm",
                           color="secondary", className="me-1"),
                dbc.Button("Delete", id={"type": "order-delete", "index": o.id}, size="sm",
                           color="danger", outline=True),
            ], style={"whiteSpace": "nowrap", "textAlign": "right"}),
        ]))

    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Date"), html.Th("Customer"), html.Th("Source"),
            html.Th("Paid", style={"textAlign": "right"}),
            html.Th("Seller", style={"textAlign": "right"}),
            html.Th(""),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def render_orders(term=""):
    orders = ds.get_state().list_orders()
    return [search_summary(orders, term), orders_table(search_orders(orders, term))]


def layout():
    """Build the Orders page."""
    return html.Div([
        dbc.Row([
            dbc.Col(dbc.Input(id="orders-search", placeholder="Search customer, seller or order number",
                              debounce=True), md=6),
            dbc.Col([
                dcc.Upload(
                    id="orders-upload",
                    children=dbc.Button("Import CSV", color="secondary", className="me-2"),
                    accept=".csv",
                    style={"display": "inline-block"},
                ),
                dbc.Button("Export CSV", id="orders-export-btn", color="info"),
                dcc.Download(id="orders-download"),
            ], md=6, style={"textAlign": "right"}),
        ], className="mb-2"),
        html.Div(id="orders-import-status"),
        section("Orders", html.Div(render_orders(), id="orders-table"), CYAN),
    ])
