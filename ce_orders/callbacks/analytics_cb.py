"""Analytics page callbacks — recompute stats whenever a filter changes."""
from dash import Input, Output

from ce_orders import data_state as ds
from ce_orders.periods import PeriodSpec


def period_from_inputs(period, start_date, end_date):
    if period == "custom":
        return PeriodSpec("custom", start=start_date or None, end=end_date or None)
    return PeriodSpec.coerce(period)


def register_callbacks(app):
    @app.callback(
        Output("an-range-col", "style"),
        Input("an-period", "value"),
    )
    def toggle_range(period):
        return {} if period == "custom" else {"display": "none"}

    @app.callback(
        Output("an-body", "children"),
        Input("an-period", "value"),
        Input("an-source", "value"),
        Input("an-potential", "value"),
        Input("an-range", "start_date"),
        Input("an-range", "end_date"),
    )
    def update_stats(period, source, potential, start_date, end_date):
        from ce_orders.pages.analytics import render_stats
        spec = period_from_inputs(period, start_date, end_date)
        stats = ds.get_state().compute_stats(spec, source or "all", potential or "all")
        return render_stats(stats)
