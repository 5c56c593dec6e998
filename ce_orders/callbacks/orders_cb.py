"""Orders page callbacks — search, delete, edit, CSV import/export."""
import base64

from dash import Input, Output, State, callback_context, dcc, no_update, ALL
import dash_bootstrap_components as dbc

from ce_orders import data_state as ds
from ce_orders.csv_codec import export_filename


def decode_upload(contents):
    """Dash upload payload ('data:...;base64,XXXX') to text."""
    _content_type, content_string = contents.split(",", 1)
    return base64.b64decode(content_string).decode("utf-8-sig", errors="replace")


def import_upload(contents, filename):
    """Import an uploaded CSV into the ledger and describe the result as an Alert."""
    try:
        text = decode_upload(contents)
    except ValueError as e:
        return dbc.Alert(f"Could not read {filename}: {e}", color="danger")
    count = ds.get_state().import_csv(text)
    if not count:
        return dbc.Alert(f"No orders found in {filename}", color="warning")
    return dbc.Alert(f"Successfully imported {count} orders from {filename}.", color="success")


def _clicked():
    trig = callback_context.triggered
    return bool(trig) and bool(trig[0].get("value"))


def register_callbacks(app):
    # ── Table: search / delete / import ──────────────────────────────────
    @app.callback(
        Output("orders-table", "children"),
        Output("orders-import-status", "children"),
        Input("orders-search", "value"),
        Input({"type": "order-delete", "index": ALL}, "n_clicks"),
        Input("orders-upload", "contents"),
        State("orders-upload", "filename"),
        prevent_initial_call=True,
    )
    def refresh_orders(term, _delete_clicks, contents, filename):
        from ce_orders.pages.orders import render_orders
        trigger = callback_context.triggered_id
        status = no_update

        if isinstance(trigger, dict) and trigger.get("type") == "order-delete":
            if not _clicked():
                return no_update, no_update
            ds.get_state().delete_order(trigger["index"])
        elif trigger == "orders-upload":
            if contents is None:
                return no_update, no_update
            status = import_upload(contents, filename or "upload.csv")

        return render_orders(term or ""), status

    # ── Edit → jump to the entry form ────────────────────────────────────
    @app.callback(
        Output("url", "pathname"),
        Input({"type": "order-edit", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def edit_order(_edit_clicks):
        trigger = callback_context.triggered_id
        if not isinstance(trigger, dict) or not _clicked():
            return no_update
        ds.get_state().start_edit(trigger["index"])
        return "/"

    # ── Export ───────────────────────────────────────────────────────────
    @app.callback(
        Output("orders-download", "data"),
        Input("orders-export-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def export_orders(n_clicks):
        state = ds.get_state()
        if not n_clicks or not state.list_orders():
            return no_update
        return dcc.send_string(state.export_csv(), export_filename())
