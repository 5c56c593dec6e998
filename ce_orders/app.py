"""
CE Order Management — order entry, payout ledger and profit analytics
Run:  python -m ce_orders.app
Open: http://127.0.0.1:8070
"""

import logging
import os
import sys

# supabase_loader lives at the project root
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
import flask

from ce_orders import data_state as ds

# ── Dash app ─────────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap",
    ],
    title="CE Order Management",
)
server = app.server  # gunicorn target (see wsgi.py)

# ── Sidebar ──────────────────────────────────────────────────────────────────
# (href, icon, label); None draws a divider
NAV_ITEMS = [
    ("/", "➕", "New Order"),
    ("/orders", "\U0001f4cb", "Orders"),
    None,
    ("/analytics", "\U0001f4ca", "Analytics"),
    ("/sellers", "\U0001f4b0", "Sellers"),
]


def _nav_link(href, icon, label):
    return dbc.NavLink([html.Span(icon, className="nav-icon me-2"), label],
                       href=href, active="exact")


def _build_sidebar():
    links = [html.Hr(className="sidebar-divider") if item is None else _nav_link(*item)
             for item in NAV_ITEMS]
    brand = html.Div([html.H4("CE ORDERS"), html.Small("orders · payouts · profit")],
                     className="sidebar-brand")
    return html.Div([brand, dbc.Nav(links, vertical=True, pills=True)], className="sidebar")


# ── Layout (rebuilt on every page load so the header counts are current) ─────
def serve_layout():
    state = ds.get_state()
    header = html.Div([
        html.H3("CE ORDER MANAGEMENT"),
        html.Div(
            f"{len(state.list_orders())} orders  |  {len(state.list_categories())} categories  |  "
            f"{len(state.list_earnings())} seller payouts",
            className="header-subtitle",
        ),
    ], className="app-header")
    content = html.Div([
        header,
        html.Div(id="page-content"),
        html.Div(id="toast-container"),
    ], className="main-content")
    return html.Div([dcc.Location(id="url", refresh=False), _build_sidebar(), content])


app.layout = serve_layout


# ── API routes ───────────────────────────────────────────────────────────────
@server.route("/api/reload")
def api_reload():
    """Re-read orders, categories and payouts from the store (used after deploys)."""
    return flask.jsonify({"ok": True, **ds.reload_state()})


@server.route("/api/diagnostics")
def api_diagnostics():
    """Headline numbers as JSON, for checking a deployment without the UI."""
    state = ds.get_state()
    stats = state.compute_stats()
    payouts = state.compute_earning_stats()
    return flask.jsonify({
        "store": type(state.store).__name__,
        "orders": {
            "count": stats.total_orders,
            "revenue": round(stats.total_revenue, 2),
            "gst": round(stats.total_gst, 2),
            "pg_charges": round(stats.total_pg_charges, 2),
            "referrals": round(stats.total_referrals, 2),
            "seller_income": round(stats.seller_income, 2),
            "net_ce_profit": round(stats.net_ce_profit, 2),
        },
        "payouts": {
            "sellers": payouts.total_sellers,
            "paid": round(payouts.paid_balance, 2),
            "unpaid": round(payouts.unpaid_balance, 2),
        },
        "categories": len(state.list_categories()),
    })


# ── Callbacks (registered once the app object exists) ───────────────────────
from ce_orders.callbacks import navigation_cb, order_cb, orders_cb, analytics_cb, seller_cb

for _module in (navigation_cb, order_cb, orders_cb, analytics_cb, seller_cb):
    _module.register_callbacks(app)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.environ.get("PORT", 8070))
    print("\n  CE Order Management")
    print(f"  http://127.0.0.1:{port}\n")
    app.run(debug=False, host="0.0.0.0", port=port)
