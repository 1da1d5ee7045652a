"""Plain-text settlement document for printing or attaching to a payout."""

from datetime import UTC, datetime

from ordering.settlement.statement import SettlementStatement, SettlementWindow

TITLE = "Vendor Settlement Statement"
WIDTH = 78

_NAME_WIDTH = 40
_QTY_WIDTH = 6
_AMOUNT_WIDTH = 14


def _period(window: SettlementWindow) -> str:
    if window.is_open:
        return "All time"
    start = window.start.date().isoformat() if window.start else "..."
    end = window.end.date().isoformat() if window.end else "..."
    return f"{start} to {end} (end exclusive)"


def _row(name: str, quantity: str, unit_price: str, total: str) -> str:
    if len(name) > _NAME_WIDTH:
        name = name[: _NAME_WIDTH - 3] + "..."
    return (
        f"{name:<{_NAME_WIDTH}}{quantity:>{_QTY_WIDTH}}"
        f"{unit_price:>{_AMOUNT_WIDTH}}{total:>{_AMOUNT_WIDTH}}"
    )


def render_statement(statement: SettlementStatement, generated_at: datetime | None = None) -> str:
    generated_at = generated_at or datetime.now(UTC)

    out = [
        TITLE.center(WIDTH),
        "=" * WIDTH,
        f"Vendor:    {statement.vendor_name}",
        f"Period:    {_period(statement.window)}",
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M UTC')}",
        "",
        _row("Product", "Qty", "Unit Price", "Line Total"),
        "-" * WIDTH,
    ]
    for line in statement.lines:
        out.append(_row(line.product_name, str(line.quantity), f"{line.unit_price:.2f}", f"{line.total_price:.2f}"))
    if not statement.lines:
        out.append("No completed sales in this period.")
    out.append("-" * WIDTH)

    out.extend(
        [
            f"{'Total revenue:':<30}{statement.total_revenue:>20.2f}",
            f"{f'Commission ({statement.commission_rate:g}%):':<30}{statement.commission_amount:>20.2f}",
            f"{'Net payable:':<30}{statement.net_payable:>20.2f}",
            "",
            "Generated automatically by the ordering service.",
        ]
    )
    return "\n".join(out) + "\n"
