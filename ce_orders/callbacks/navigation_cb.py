"""Page routing callback — renders the correct page based on URL."""
from dash import html, Input, Output

from ce_orders.theme import RED


def render_page(pathname):
    if pathname == "/" or pathname is None:
        from ce_orders.pages.new_order import layout
        return layout()
    elif pathname == "/orders":
        from ce_orders.pages.orders import layout
        return layout()
    elif pathname == "/analytics":
        from ce_orders.pages.analytics import layout
        return layout()
    elif pathname == "/sellers":
        from ce_orders.pages.sellers import layout
        return layout()
    else:
        return html.Div([
            html.H3("404 — Page Not Found", style={"color": RED}),
            html.P(f"No page at '{pathname}'"),
        ], style={"padding": "40px"})


def register_callbacks(app):
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def route_page(pathname):
        # leaving a form abandons any edit in progress
        from ce_orders import data_state as ds
        state = ds.get_state()
        if pathname not in ("/", None):
            state.cancel_edit()
        if pathname != "/sellers":
            state.cancel_earning_edit()
        return render_page(pathname)
