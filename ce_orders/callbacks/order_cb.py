"""New Order callbacks — live preview, save/update, cancel edit, add category."""
from dash import Input, Output, State, no_update
import dash_bootstrap_components as dbc

from ce_orders import data_state as ds
from ce_orders.finance import money
from ce_orders.theme import TOAST_STYLE

FORM_STATES = [
    ("order_date", "order-date"),
    ("order_number", "order-number"),
    ("customer_name", "order-customer"),
    ("email", "order-email"),
    ("mobile_number", "order-mobile"),
    ("order_amount", "order-amount"),
    ("discount_given", "order-discount"),
    ("wallet_amount", "order-wallet"),
    ("referral_amount", "order-referral"),
    ("is_gst_applied", "order-gst"),
    ("apply_seller_share", "order-share"),
    ("platform_fee_percent", "order-fee"),
    ("order_source", "order-source"),
    ("category", "order-category"),
    ("pg_name", "order-pg"),
    ("is_potential", "order-potential"),
]


def raw_from_form(*values):
    """Map form values (in FORM_STATES order) to a raw order dict."""
    return {name: val for (name, _), val in zip(FORM_STATES, values)}


def submit_order(raw):
    """Save the form through the edit session and return (toast, updated?)."""
    state = ds.get_state()
    updating = state.edit.is_editing
    record = state.submit_order(raw)
    verb = "Updated" if updating else "Saved"
    toast = dbc.Toast(
        f"{verb} order {record.order_number} — customer pays {money(record.total_amount_paid)}",
        header=f"Order {verb}",
        icon="success",
        duration=3000,
        style=TOAST_STYLE,
    )
    return toast, updating


def register_callbacks(app):
    # ── Live preview ──────────────────────────────────────────────────────
    @app.callback(
        Output("order-preview", "children"),
        [Input(cid, "value") for _, cid in FORM_STATES],
    )
    def update_preview(*values):
        from ce_orders.pages.new_order import preview_panel
        return preview_panel(raw_from_form(*values))

    # ── Save / update ─────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("page-content", "children", allow_duplicate=True),
        Input("order-submit-btn", "n_clicks"),
        [State(cid, "value") for _, cid in FORM_STATES],
        prevent_initial_call=True,
    )
    def save_order(n_clicks, *values):
        if not n_clicks:
            return no_update, no_update
        toast, _ = submit_order(raw_from_form(*values))
        from ce_orders.pages.new_order import layout
        return toast, layout()

    # ── Cancel edit ───────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children", allow_duplicate=True),
        Input("order-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def cancel_edit(n_clicks):
        if not n_clicks:
            return no_update
        ds.get_state().cancel_edit()
        from ce_orders.pages.new_order import layout
        return layout()

    # ── Add category ──────────────────────────────────────────────────────
    @app.callback(
        Output("order-category", "options"),
        Output("order-category", "value"),
        Output("new-category-name", "value"),
        Input("add-category-btn", "n_clicks"),
        State("new-category-name", "value"),
        prevent_initial_call=True,
    )
    def add_category(n_clicks, name):
        name = (name or "").strip()
        if not n_clicks or not name:
            return no_update, no_update, no_update
        state = ds.get_state()
        state.add_category(name)
        options = [{"label": c, "value": c} for c in state.list_categories()]
        return options, name, ""
