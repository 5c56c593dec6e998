"""New Order page — entry form with live money preview; doubles as the edit form."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from ce_orders.theme import *
from ce_orders.components.cards import section, money_row
from ce_orders.finance import derive, net_base
from ce_orders.models import (
    DEFAULT_PLATFORM_FEE, GUEST_CUSTOMER, MAX_PLATFORM_FEE, ORDER_SOURCES, PG_RATES,
    UNTITLED_ORDER, clamp_amount, now_local, to_local,
)
from ce_orders import data_state as ds


def form_values(order=None, categories=None):
    """Initial form values: blank for a new order, the record's values when editing."""
    categories = categories or []
    if order is None:
        return {
            "order_date": now_local().strftime("%Y-%m-%dT%H:%M"),
            "order_number": "", "customer_name": "", "email": "", "mobile_number": "",
            "order_amount": 0, "discount_given": 0, "wallet_amount": 0, "referral_amount": 0,
            "is_gst_applied": False, "apply_seller_share": False,
            "platform_fee_percent": DEFAULT_PLATFORM_FEE,
            "order_source": "Website",
            "category": categories[0] if categories else "",
            "pg_name": "None", "is_potential": False,
        }
    return {
        "order_date": to_local(order.order_date).strftime("%Y-%m-%dT%H:%M"),
        # placeholders go back to blank so the user sees an empty field
        "order_number": "" if order.order_number == UNTITLED_ORDER else order.order_number,
        "customer_name": "" if order.customer_name == GUEST_CUSTOMER else order.customer_name,
        "email": order.email, "mobile_number": order.mobile_number,
        "order_amount": order.order_amount, "discount_given": order.discount_given,
        "wallet_amount": order.wallet_amount, "referral_amount": order.referral_amount,
        "is_gst_applied": order.is_gst_applied, "apply_seller_share": order.apply_seller_share,
        "platform_fee_percent": order.platform_fee_percent,
        "order_source": order.order_source, "category": order.category,
        "pg_name": order.pg_name, "is_potential": order.is_potential,
    }


def preview_panel(raw):
    """Derived amounts for the current form values."""
    d = derive(raw)
    rows = [
        money_row("Net base (amount - discount)", net_base(raw)),
        money_row("GST @ 18%", d.gst_amount),
        money_row("Wallet used", clamp_amount(raw.get("wallet_amount")), cost=True),
        money_row("Customer pays", d.total_amount_paid, total=True, color=GREEN),
        money_row("CE commission", d.commission_amount, color=CYAN),
        money_row("Seller income", d.seller_income, color=PURPLE),
    ]
    return html.Div(rows)


def _field(label, component):
    return dbc.Col([dbc.Label(label, style={"color": GRAY, "fontSize": "11px"}), component], md=6,
                   className="mb-2")


def _money_input(field_id, value):
    return dbc.Input(id=field_id, type="number", min=0, step="any", value=value)


def layout():
    """Build the New Order page (prefilled when an order is being edited)."""
    state = ds.get_state()
    categories = state.list_categories()
    editing = state.get_order(state.edit.editing_id) if state.edit.is_editing else None
    v = form_values(editing, categories)

    banner = None
    if editing is not None:
        banner = dbc.Alert([
            html.Span(f"Editing order {editing.order_number} ({editing.customer_name})"),
            dbc.Button("Cancel Edit", id="order-cancel-btn", color="secondary", size="sm",
                       className="ms-3"),
        ], color="info", className="d-flex align-items-center")
    else:
        banner = html.Div(dbc.Button(id="order-cancel-btn"), style={"display": "none"})

    customer = section("Customer", dbc.Row([
        _field("Order date", dbc.Input(id="order-date", type="datetime-local", value=v["order_date"])),
        _field("Order number", dbc.Input(id="order-number", value=v["order_number"],
                                         placeholder=UNTITLED_ORDER)),
        _field("Customer name", dbc.Input(id="order-customer", value=v["customer_name"],
                                          placeholder=GUEST_CUSTOMER)),
        _field("Email", dbc.Input(id="order-email", type="email", value=v["email"])),
        _field("Mobile", dbc.Input(id="order-mobile", value=v["mobile_number"])),
        _field("Source", dbc.RadioItems(id="order-source", value=v["order_source"], inline=True,
                                        options=[{"label": s, "value": s} for s in ORDER_SOURCES])),
    ]), BLUE)

    amounts = section("Amounts", dbc.Row([
        _field("Order amount", _money_input("order-amount", v["order_amount"])),
        _field("Discount given", _money_input("order-discount", v["discount_given"])),
        _field("Wallet used", _money_input("order-wallet", v["wallet_amount"])),
        _field("Referral payout", _money_input("order-referral", v["referral_amount"])),
        _field("Payment gateway", dbc.Select(id="order-pg", value=v["pg_name"],
                                             options=[{"label": f"{n} ({r * 100:.2f}%)", "value": n}
                                                      for n, r in PG_RATES.items()])),
        dbc.Col([
            dbc.Switch(id="order-gst", label="Apply GST (18%)", value=v["is_gst_applied"]),
            dbc.Switch(id="order-share", label="Apply seller share", value=v["apply_seller_share"]),
            dbc.Switch(id="order-potential", label="Potential order", value=v["is_potential"]),
        ], md=6),
        dbc.Col([
            dbc.Label("Platform fee %", style={"color": GRAY, "fontSize": "11px"}),
            dcc.Slider(id="order-fee", min=0, max=MAX_PLATFORM_FEE, step=1,
                       value=v["platform_fee_percent"],
                       marks={i: str(i) for i in range(0, MAX_PLATFORM_FEE + 1, 5)}),
        ], md=12),
    ]), ORANGE)

    category = section("Category", dbc.Row([
        dbc.Col(dcc.Dropdown(id="order-category", value=v["category"], clearable=False,
                             options=[{"label": c, "value": c} for c in categories]), md=6),
        dbc.Col(dbc.InputGroup([
            dbc.Input(id="new-category-name", placeholder="New category"),
            dbc.Button("Add", id="add-category-btn", color="secondary"),
        ]), md=6),
    ]), PURPLE)

    return html.Div([
        banner,
        dbc.Row([
            dbc.Col([customer, amounts, category], md=8),
            dbc.Col([
                section("Preview", html.Div(id="order-preview"), GREEN),
                dbc.Button("Update Order" if editing else "Save Order", id="order-submit-btn",
                           color="success", className="w-100"),
            ], md=4),
        ]),
        html.Div(id="order-toast"),
    ])
