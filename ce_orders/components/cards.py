"""Section cards, money rows and chart styling shared by the pages."""
from dash import html
import dash_bootstrap_components as dbc
from ce_orders.theme import *
from ce_orders.finance import money


def section(title, children, color=ORANGE, badge=None):
    """Card with a colored title bar; *badge* (e.g. a row count) sits at the right."""
    header = [html.Span(title)]
    if badge is not None:
        header.append(dbc.Badge(str(badge), color="secondary", pill=True, className="ms-2"))
    return dbc.Card([
        dbc.CardHeader(header, style={"color": color, "fontWeight": "bold", "fontSize": "15px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "10px 16px"}),
        dbc.CardBody(children, style={"padding": "14px 16px"}),
    ], className="mb-3")


def money_row(label, amount, cost=False, total=False, color=WHITE):
    """One line of a money breakdown.

    Cost rows are indented and shown as deductions; the total row is bold and
    turns red when it goes negative.
    """
    shown = -abs(amount) if cost else amount
    value_color = RED if shown < 0 and (cost or total) else color
    style = {"display": "flex", "justifyContent": "space-between", "fontSize": "13px",
             "padding": "5px 0", "borderBottom": "1px solid #ffffff10"}
    if cost:
        style["paddingLeft"] = "20px"
    if total:
        style.update(fontWeight="bold", borderBottom="none", borderTop="2px solid #ffffff30",
                     padding="8px 0 0 0", marginTop="4px")
    return html.Div([
        html.Span(label, style={"color": GRAY if cost else color}),
        html.Span(money(shown), style={"color": value_color, "fontFamily": "monospace"}),
    ], style=style)


def style_figure(fig, height=320):
    """Dark transparent Plotly styling with room for horizontal category labels."""
    fig.update_layout(**{**CHART_LAYOUT, "height": height, "showlegend": False})
    fig.update_xaxes(gridcolor="#ffffff15", zeroline=False)
    fig.update_yaxes(automargin=True)
    return fig


def empty_note(text):
    return html.P(text, style={"color": GRAY, "textAlign": "center", "padding": "30px"})
