"""
Theme constants — colors, chart layout, toast placement.
Import from here instead of hardcoding colors anywhere.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
GREEN = "#2ecc71"
RED = "#e74c3c"
BLUE = "#3498db"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
TEAL = "#1abc9c"
WHITE = "#ffffff"
GRAY = "#aaaaaa"
DARKGRAY = "#666666"
CYAN = "#00d4ff"

# ── Channel / status colors ──────────────────────────────────────────────────
SOURCE_COLORS = {
    "Whatsapp": GREEN,
    "Website": BLUE,
}

STATUS_COLORS = {
    "Paid": GREEN,
    "Unpaid": ORANGE,
}

# Cycled for category bars / legend chips
CATEGORY_PALETTE = [BLUE, ORANGE, PURPLE, TEAL, CYAN, GREEN, RED, "#e91e8f", "#555555"]

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": WHITE},
    margin=dict(t=50, b=30, l=60, r=20),
)

# ── Notifications ────────────────────────────────────────────────────────────
TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
