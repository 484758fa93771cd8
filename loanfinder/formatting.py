def fmt_money(x):
    try:
        return f"${x:,.0f}"
    except Exception:
        return "-"

def fmt_percent(x):
    try:
        return f"{x:.0f}%"
    except Exception:
        return "-"
