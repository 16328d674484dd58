"""
Pure pricing and margin arithmetic for quotes.
Nothing here touches the database; callers pass the rate card in.
"""

from typing import Iterable, List, Mapping, Tuple

from quotegen.schemas.quote import (
    QuoteSelection,
    QuoteLineItem,
    QuoteHeader,
    AnalysisItem,
    AnalysisSummary,
    AnalysisReportItem,
    AnalysisReport,
)


def unit_margin(standard_cost: float, ops_cost: float) -> Tuple[float, float]:
    """
    Compute the margin of one unit and its percentage of the standard cost.

    Args:
        standard_cost: Billed cost per unit.
        ops_cost: Internal cost per unit.

    Returns:
        (margin, margin_percentage); the percentage is 0 when standard_cost <= 0.
    """
    margin = standard_cost - ops_cost
    margin_percentage = margin / standard_cost * 100 if standard_cost > 0 else 0.0
    return margin, margin_percentage


def price_line_item(item, quantity: int, duration: int) -> QuoteLineItem:
    """Price one rate card item (ORM row or schema) for a quantity and duration."""
    return QuoteLineItem(
        id=item.id,
        item_ref_no=item.item_ref_no,
        category=item.category,
        subcategory=item.subcategory,
        detailed_description=item.detailed_description,
        ops_cost=item.ops_cost,
        standard_cost=item.standard_cost,
        quantity=quantity,
        duration=duration,
        total=item.standard_cost * quantity * duration,
    )


def price_selections(
    selections: Iterable[QuoteSelection],
    rate_card: Mapping[str, object],
) -> Tuple[List[QuoteLineItem], float]:
    """
    Price selections against the rate card.

    Selections whose item id is not on the rate card are skipped without error.
    Output order follows input order.

    Returns:
        (line_items, grand_total)
    """
    line_items = []
    for selection in selections:
        item = rate_card.get(selection.item_id)
        if item is None:
            continue
        line_items.append(price_line_item(item, selection.quantity, selection.duration))
    grand_total = sum((line.total for line in line_items), 0.0)
    return line_items, grand_total


def analyze_selections(
    selections: Iterable[QuoteSelection],
    rate_card: Mapping[str, object],
) -> AnalysisSummary:
    """
    Price selections and attach unit margins.

    total_margin is the sum of unit margins (not scaled by quantity or
    duration) and total_profit is the sum of line totals.
    """
    line_items, total_profit = price_selections(selections, rate_card)
    items = []
    for line in line_items:
        margin, margin_percentage = unit_margin(line.standard_cost, line.ops_cost)
        items.append(
            AnalysisItem(
                **line.model_dump(),
                margin=margin,
                margin_percentage=margin_percentage,
            )
        )
    total_margin = sum((item.margin for item in items), 0.0)
    return AnalysisSummary(items=items, total_margin=total_margin, total_profit=total_profit)


def build_analysis_report(header: QuoteHeader, line_items: Iterable[QuoteLineItem]) -> AnalysisReport:
    """
    Build the revenue/cost/profit report printed for a saved quote.

    Unlike analyze_selections, margins here are scaled by quantity * duration.
    """
    items = []
    for line in line_items:
        margin, margin_percentage = unit_margin(line.standard_cost, line.ops_cost)
        units = line.quantity * line.duration
        items.append(
            AnalysisReportItem(
                **line.model_dump(),
                margin=margin,
                margin_percentage=margin_percentage,
                total_cost=line.ops_cost * units,
                total_item_margin=margin * units,
            )
        )

    total_revenue = sum((item.total for item in items), 0.0)
    total_cost = sum((item.total_cost for item in items), 0.0)
    total_profit = total_revenue - total_cost
    total_margin = sum((item.total_item_margin for item in items), 0.0)
    overall_margin_percentage = total_profit / total_revenue * 100 if total_revenue > 0 else 0.0

    return AnalysisReport(
        header=header,
        items=items,
        total_revenue=total_revenue,
        total_cost=total_cost,
        total_profit=total_profit,
        total_margin=total_margin,
        overall_margin_percentage=overall_margin_percentage,
    )
