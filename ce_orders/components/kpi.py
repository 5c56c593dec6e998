"""KPI pills for the analytics and seller pages."""
from dash import html
import dash_bootstrap_components as dbc
from ce_orders.theme import *
from ce_orders.finance import money


def icon_badge(text, color):
    """Rounded square chip holding a one-character symbol."""
    return html.Div(text, style={
        "width": "34px", "height": "34px", "borderRadius": "8px",
        "border": f"1px solid {color}", "backgroundColor": f"{color}22", "color": color,
        "display": "inline-flex", "alignItems": "center", "justifyContent": "center",
        "fontSize": "14px", "fontWeight": "bold", "flexShrink": "0",
    })


def kpi_pill(icon, label, value, color, subtitle=""):
    """Headline number with a label above it and an optional note below."""
    lines = [
        html.Div(label, style={"color": GRAY, "fontSize": "11px", "fontWeight": "600",
                               "letterSpacing": "1px", "textTransform": "uppercase"}),
        html.Div(value, style={"color": WHITE, "fontSize": "22px", "fontWeight": "bold",
                               "fontFamily": "monospace"}),
    ]
    if subtitle:
        lines.append(html.Div(subtitle, style={"color": DARKGRAY, "fontSize": "11px"}))
    return dbc.Card(
        dbc.CardBody([icon_badge(icon, color), html.Div(lines, style={"marginLeft": "12px"})],
                     style={"display": "flex", "alignItems": "center", "padding": "12px 16px"}),
        style={"borderLeft": f"4px solid {color}", "flex": "1", "minWidth": "170px"},
        className="kpi-pill",
    )


def money_pill(icon, label, amount, color, subtitle=""):
    """kpi_pill for a rupee amount; the accent turns red when the amount is negative."""
    return kpi_pill(icon, label, money(amount), RED if amount < 0 else color, subtitle)


def kpi_strip(pills):
    """Row of KPI pills that wraps on narrow screens."""
    return html.Div(pills, style={"display": "flex", "flexWrap": "wrap", "gap": "10px",
                                  "marginBottom": "16px"})
