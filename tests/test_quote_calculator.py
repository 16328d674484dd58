"""
Pricing and margin arithmetic tests.
"""

from types import SimpleNamespace

import pytest

from quotegen.schemas.quote import QuoteHeader, QuoteSelection
from quotegen.utils.quote_calculator import (
    unit_margin,
    price_selections,
    analyze_selections,
    build_analysis_report,
)


def _item(item_id, standard_cost, ops_cost, description="desc"):
    return SimpleNamespace(
        id=item_id,
        item_ref_no=f"R-{item_id}",
        category="Cat",
        subcategory="Sub",
        detailed_description=description,
        ops_cost=ops_cost,
        standard_cost=standard_cost,
    )


RATE_CARD = {
    "A": _item("A", 100.0, 80.0),
    "B": _item("B", 50.0, 60.0),
    "Z": _item("Z", 0.0, 10.0),
}


def _select(*triples):
    return [QuoteSelection.model_validate(list(t)) for t in triples]


def test_price_selections_multiplies_standard_cost():
    items, total = price_selections(_select(("A", 2, 3)), RATE_CARD)

    assert len(items) == 1
    assert items[0].total == 600.0
    assert items[0].quantity == 2
    assert items[0].duration == 3
    assert total == 600.0


def test_price_selections_skips_unknown_ids_and_keeps_order():
    items, total = price_selections(_select(("B", 1, 1), ("missing", 5, 5), ("A", 1, 1)), RATE_CARD)

    assert [item.id for item in items] == ["B", "A"]
    assert total == 150.0


def test_price_selections_empty():
    items, total = price_selections([], RATE_CARD)

    assert items == []
    assert total == 0.0


def test_zero_quantity_prices_at_zero():
    items, total = price_selections(_select(("A", 0, 12)), RATE_CARD)

    assert items[0].total == 0.0
    assert total == 0.0


def test_repeated_selection_gives_repeated_lines():
    items, total = price_selections(_select(("A", 1, 1), ("A", 1, 1)), RATE_CARD)

    assert len(items) == 2
    assert total == 200.0


def test_unit_margin():
    assert unit_margin(100.0, 80.0) == (20.0, 20.0)
    margin, pct = unit_margin(50.0, 60.0)
    assert margin == -10.0
    assert pct == pytest.approx(-20.0)


def test_unit_margin_percentage_zero_for_non_positive_standard_cost():
    assert unit_margin(0.0, 10.0) == (-10.0, 0.0)
    assert unit_margin(-5.0, 1.0)[1] == 0.0


def test_analyze_selections_sums_unit_margins_and_revenue():
    summary = analyze_selections(_select(("A", 2, 3), ("B", 1, 1)), RATE_CARD)

    assert [item.margin for item in summary.items] == [20.0, -10.0]
    assert summary.items[0].margin_percentage == 20.0
    # unit margins, not scaled by quantity or duration
    assert summary.total_margin == 10.0
    assert summary.total_profit == 650.0


def test_analyze_selections_zero_standard_cost():
    summary = analyze_selections(_select(("Z", 1, 1)), RATE_CARD)

    assert summary.items[0].margin == -10.0
    assert summary.items[0].margin_percentage == 0.0


def test_build_analysis_report_scales_margins():
    header = QuoteHeader(client_name="Acme", project_name="Migration")
    items, _ = price_selections(_select(("A", 2, 3), ("B", 1, 2)), RATE_CARD)

    report = build_analysis_report(header, items)

    assert report.items[0].total_cost == 480.0
    assert report.items[0].total_item_margin == 120.0
    assert report.items[1].total_cost == 120.0
    assert report.items[1].total_item_margin == -20.0
    assert report.total_revenue == 700.0
    assert report.total_cost == 600.0
    assert report.total_profit == 100.0
    assert report.total_margin == 100.0
    assert report.overall_margin_percentage == pytest.approx(100.0 / 700.0 * 100)


def test_build_analysis_report_without_revenue():
    report = build_analysis_report(QuoteHeader(), [])

    assert report.total_revenue == 0.0
    assert report.overall_margin_percentage == 0.0
