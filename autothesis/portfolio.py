"""Portfolio valuation and conviction alignment."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass
class PositionValuation:
    """A position priced against the market.

    ``position`` needs ``ticker``, ``shares`` and ``total_cost`` attributes.
    """

    position: Any
    current_price: float | None
    market_value: float | None
    gain_loss: float | None
    gain_loss_pct: float | None
    allocation_pct: float | None


@dataclass
class PortfolioSummary:
    """Totals across a portfolio's positions."""

    total_market_value: float
    total_cost: float
    total_gain_loss: float
    total_gain_loss_pct: float
    cash_balance: float
    total_value: float


def classify_conviction_alignment(conviction: float | None, is_active: bool) -> str:
    """How well the latest thesis score supports holding a position."""
    if not is_active:
        return "closed"
    if conviction is None:
        return "no_thesis"
    if conviction >= 7.0:
        return "aligned"
    if conviction >= 6.0:
        return "moderate"
    if conviction >= 5.0:
        return "mismatch"
    return "low_conviction"


def conviction_alert(ticker: str, score: float | None) -> tuple[str, str] | None:
    """Severity and message for a held position with low conviction, if any."""
    if score is None or score >= 6.0:
        return None
    severity = "critical" if score < 5.0 else "warning"
    message = (
        f"Position {ticker} has low thesis conviction ({score:.1f}/10). "
        "Consider reviewing or closing."
    )
    return severity, message


def value_positions(
    positions: Sequence[Any], prices: Mapping[str, float]
) -> list[PositionValuation]:
    """Price each position and work out its gain and share of the portfolio."""
    priced = []
    for position in positions:
        price = prices.get(position.ticker)
        market_value = price * position.shares if price is not None else None
        priced.append((position, price, market_value))

    total_market_value = sum(mv for _, _, mv in priced if mv is not None)

    valuations = []
    for position, price, market_value in priced:
        gain_loss = market_value - position.total_cost if market_value is not None else None
        gain_loss_pct = (
            gain_loss / position.total_cost * 100.0
            if gain_loss is not None and abs(position.total_cost) > 0.0
            else None
        )
        allocation_pct = (
            market_value / total_market_value * 100.0
            if market_value is not None and total_market_value > 0.0
            else None
        )
        valuations.append(
            PositionValuation(
                position=position,
                current_price=price,
                market_value=market_value,
                gain_loss=gain_loss,
                gain_loss_pct=gain_loss_pct,
                allocation_pct=allocation_pct,
            )
        )
    return valuations


def summarize_portfolio(
    valuations: Sequence[PositionValuation], cash_balance: float
) -> PortfolioSummary:
    """Total the valued positions and add the cash balance."""
    total_market_value = sum(
        v.market_value for v in valuations if v.market_value is not None
    )
    total_cost = sum(v.position.total_cost for v in valuations)
    total_gain_loss = total_market_value - total_cost
    total_gain_loss_pct = total_gain_loss / total_cost * 100.0 if total_cost > 0.0 else 0.0
    return PortfolioSummary(
        total_market_value=total_market_value,
        total_cost=total_cost,
        total_gain_loss=total_gain_loss,
        total_gain_loss_pct=total_gain_loss_pct,
        cash_balance=cash_balance,
        total_value=total_market_value + cash_balance,
    )