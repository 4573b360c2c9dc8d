"""Window filtering, aggregation and display formatting package."""

from fincalc.queries.aggregator import category_breakdown, category_shares, summarize
from fincalc.queries.formatting import build_report_display, format_amount, format_share
from fincalc.queries.window import coerce_period, filter_by_period, is_within

__all__ = [
    "build_report_display",
    "category_breakdown",
    "category_shares",
    "coerce_period",
    "filter_by_period",
    "format_amount",
    "format_share",
    "is_within",
    "summarize",
]
