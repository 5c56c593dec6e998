"""Sellers page callbacks — add/edit payout, mark paid, delete, search/filter."""
from dash import Input, Output, State, callback_context, no_update, ALL
import dash_bootstrap_components as dbc

from ce_orders import data_state as ds
from ce_orders.finance import money
from ce_orders.theme import TOAST_STYLE


def save_payout(seller, amount, status, date, notes):
    """Create a payout, or update the one being edited.

    Returns (Toast, updating). The Toast is None when the seller name is blank,
    and the edit (if any) stays open so the user can fix the name.
    """
    if not (seller or "").strip():
        return None, False
    state = ds.get_state()
    updating = state.earning_edit.is_editing
    record = state.submit_earning({
        "seller_name": seller, "payout_amount": amount, "status": status,
        "date": date, "notes": notes,
    })
    toast = dbc.Toast(
        f"{money(record.payout_amount)} for {record.seller_name} ({record.status})",
        header="Payout Updated" if updating else "Payout Added",
        icon="success",
        duration=3000,
        style=TOAST_STYLE,
    )
    return toast, updating


def form_outputs(record=None):
    """Values for the payout form outputs: seller, amount, status, date, notes, label, cancel style."""
    from ce_orders.pages.sellers import form_controls, payout_form_values
    values = payout_form_values(record)
    return (values["seller_name"], values["payout_amount"], values["status"], values["date"],
            values["notes"]) + form_controls(record is not None)


def register_callbacks(app):
    @app.callback(
        Output("earning-body", "children"),
        Output("earning-toast", "children"),
        Output("earning-seller", "value"),
        Output("earning-amount", "value"),
        Output("earning-status", "value"),
        Output("earning-date", "value"),
        Output("earning-notes", "value"),
        Output("earning-submit-btn", "children"),
        Output("earning-cancel-btn", "style"),
        Input("earning-submit-btn", "n_clicks"),
        Input("earning-cancel-btn", "n_clicks"),
        Input({"type": "earning-paid", "index": ALL}, "n_clicks"),
        Input({"type": "earning-edit", "index": ALL}, "n_clicks"),
        Input({"type": "earning-delete", "index": ALL}, "n_clicks"),
        Input("earning-search", "value"),
        Input("earning-filter", "value"),
        State("earning-seller", "value"),
        State("earning-amount", "value"),
        State("earning-status", "value"),
        State("earning-date", "value"),
        State("earning-notes", "value"),
        prevent_initial_call=True,
    )
    def refresh_earnings(submit_clicks, cancel_clicks, _paid_clicks, _edit_clicks, _delete_clicks,
                         term, status_filter, seller, amount, status, date, notes):
        from ce_orders.pages.sellers import render_earnings
        state = ds.get_state()
        trigger = callback_context.triggered_id
        clicked = bool(callback_context.triggered) and bool(callback_context.triggered[0].get("value"))
        was_editing = state.earning_edit.is_editing
        toast = no_update
        form = (no_update,) * 7

        if trigger == "earning-submit-btn" and submit_clicks:
            toast, _updating = save_payout(seller, amount, status, date, notes)
            if toast is None:
                toast = dbc.Alert("Enter a seller name first.", color="warning", duration=3000)
            else:
                form = form_outputs()
        elif trigger == "earning-cancel-btn" and cancel_clicks:
            state.cancel_earning_edit()
            form = form_outputs()
        elif isinstance(trigger, dict) and clicked:
            kind, record_id = trigger.get("type"), trigger["index"]
            if kind == "earning-paid":
                state.mark_paid(record_id)
            elif kind == "earning-edit":
                state.start_earning_edit(record_id)
                form = form_outputs(state.get_earning(record_id))
            elif kind == "earning-delete":
                state.delete_earning(record_id)
                if was_editing and not state.earning_edit.is_editing:
                    form = form_outputs()
        elif isinstance(trigger, dict):
            return (no_update,) * 9

        return (render_earnings(term or "", status_filter or "all"), toast) + form
