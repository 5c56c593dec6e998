"""Analytics page — period/channel/status filters, KPI strip, profit breakdown, category split."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from ce_orders.theme import *
from ce_orders.components.kpi import money_pill, kpi_strip
from ce_orders.components.cards import section, money_row, style_figure, empty_note
from ce_orders.periods import PERIOD_LABELS, POTENTIAL_FILTERS, SOURCE_FILTERS


def _category_chart(shares):
    fig = go.Figure(go.Bar(
        x=[s.value for s in shares],
        y=[s.name for s in shares],
        orientation="h",
        text=[f"{s.percent:.1f}%" for s in shares],
        textposition="auto",
        marker_color=[CATEGORY_PALETTE[i % len(CATEGORY_PALETTE)] for i in range(len(shares))],
    ))
    style_figure(fig, height=max(220, 48 * len(shares) + 80))
    fig.update_layout(title="Revenue by Category", yaxis={"autorange": "reversed"})
    return fig


def render_stats(stats):
    """Page body for one OrderStats result."""
    pills = kpi_strip([
        money_pill("₹", "Revenue", stats.total_revenue, GREEN, f"{stats.total_orders} orders"),
        money_pill("Ø", "Avg Order", stats.avg_order, BLUE, "amount - discount"),
        money_pill("CE", "Net CE Profit", stats.net_ce_profit, GREEN),
        money_pill("S", "Seller Income", stats.seller_income, PURPLE),
    ])

    breakdown = section("Profit Breakdown", [
        money_row("Collected revenue", stats.total_revenue, color=GREEN),
        money_row("GST", stats.total_gst, cost=True),
        money_row("Payment gateway charges", stats.total_pg_charges, cost=True),
        money_row("Referral payouts", stats.total_referrals, cost=True),
        money_row("Seller income", stats.seller_income, cost=True),
        money_row("Net CE profit", stats.net_ce_profit, total=True, color=CYAN),
    ], CYAN)

    channels = section("Channels", [
        money_row("Whatsapp", stats.whatsapp_revenue, color=SOURCE_COLORS["Whatsapp"]),
        money_row("Website", stats.website_revenue, color=SOURCE_COLORS["Website"]),
    ], BLUE)

    if stats.category_share:
        categories = dcc.Graph(figure=_category_chart(stats.category_share),
                               config={"displayModeBar": False})
    else:
        categories = empty_note("No orders match these filters.")

    return html.Div([
        pills,
        dbc.Row([
            dbc.Col([breakdown, channels], md=5),
            dbc.Col(section("Category Share", categories, PURPLE), md=7),
        ]),
    ])


def layout():
    """Build the Analytics page."""
    return html.Div([
        dbc.Row([
            dbc.Col(dbc.Select(id="an-period", value="all",
                               options=[{"label": lbl, "value": k} for k, lbl in PERIOD_LABELS.items()]),
                    md=3),
            dbc.Col(dbc.Select(id="an-source", value="all",
                               options=[{"label": s.title() if s == "all" else s, "value": s}
                                        for s in SOURCE_FILTERS]), md=3),
            dbc.Col(dbc.Select(id="an-potential", value="all",
                               options=[{"label": p.title(), "value": p} for p in POTENTIAL_FILTERS]),
                    md=3),
            dbc.Col(dcc.DatePickerRange(id="an-range", display_format="DD MMM YYYY",
                                        clearable=True), md=3, id="an-range-col"),
        ], className="g-2 mb-3"),
        html.Div(id="an-body"),
    ])
