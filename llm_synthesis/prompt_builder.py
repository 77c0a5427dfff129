"""Structured prompt builders for column mapping and slide generation."""

import json
from typing import Any, Dict, List, Sequence

from llm_synthesis.schema import ColumnMappingOutput, SlideDeck

_MAPPING_SCHEMA_JSON = json.dumps(ColumnMappingOutput.model_json_schema(by_alias=True), indent=2)
_SLIDES_SCHEMA_JSON = json.dumps(SlideDeck.model_json_schema(by_alias=True), indent=2)

_FIELD_DESCRIPTIONS: Dict[str, str] = {
    "revenue": "Total sale amount.",
    "price": "Price per item.",
    "quantity": "Number of items sold.",
    "date": "Primary date of transaction.",
    "customer": "Customer name or ID.",
    "item": "Product name.",
    "city": "Shipping city.",
    "state": "Shipping state.",
    "zipcode": "Shipping zipcode.",
    "brand": "Product brand.",
    "orderStatus": "Order status.",
    "cancellationReason": "Reason for cancellation.",
    "courier": "Courier service.",
    "sku": "SKU identifier.",
    "articleType": "Product category.",
    "discount": "Discount percentage.",
    "orderId": "Unique order identifier.",
    "deliveredDate": "Delivery date.",
    "cancelledDate": "Cancellation date.",
    "returnDate": "Return creation date.",
}

_MAPPING_INSTRUCTIONS = """\
You are an expert data analyst. Your primary goal is to identify columns in a
sales export that represent key business metrics.

STRICT RULES:
- Map each metric to the EXACT column name from the header list, or null.
- Never invent column names. Never map two metrics to one column unless it is clearly correct.
- Return one minified JSON object and nothing else. No markdown fences.
"""

_SLIDES_INSTRUCTIONS = """\
You are a business analyst preparing a short presentation.

STRICT RULES:
- Use ONLY the data provided. Do not compute new numbers.
- Content block "type" is one of: title, kpi, chart, summary.
- Chart blocks set "chartType" to TopItemsChart or BrandDistributionChart.
- Return a JSON object {"slides": [...]} and nothing else. No markdown fences.
"""

_SECTION_TEMPLATE = """\
## {title}
```json
{data}
```
"""


def _format_section(title: str, value: Any) -> str:
    body = json.dumps(value, indent=2, default=str)
    return _SECTION_TEMPLATE.format(title=title, data=body)


class ColumnMappingPromptBuilder:
    """Builds the prompt that maps export headers onto the canonical metrics."""

    def build_prompt(self, headers: Sequence[str], sample: Sequence[Dict[str, Any]]) -> str:
        metric_lines = "\n".join(
            f"{index}. **{name}**: {description}"
            for index, (name, description) in enumerate(_FIELD_DESCRIPTIONS.items(), start=1)
        )
        return (
            f"{_MAPPING_INSTRUCTIONS}\n"
            f"# COLUMN HEADERS\n\n{', '.join(headers)}\n\n"
            f"{_format_section(f'Sample Rows (first {len(sample)})', list(sample))}\n"
            f"# METRICS\n\n{metric_lines}\n\n"
            f"# OUTPUT SCHEMA\n\n```json\n{_MAPPING_SCHEMA_JSON}\n```\n\n"
            f"# TASK\n\n"
            f"Return a JSON object mapping these {len(_FIELD_DESCRIPTIONS)} fields "
            f"to the exact column names found in the header list."
        )


class SlideDeckPromptBuilder:
    """Builds the 4-slide presentation prompt for one domain and period."""

    def build_prompt(
        self,
        *,
        kpis: List[Dict[str, Any]],
        top_items: List[Dict[str, Any]],
        top_cities: List[Dict[str, Any]],
        domain: str,
        month: str,
        year: int,
    ) -> str:
        sections = "\n".join(
            [
                _format_section("KPIs", kpis),
                _format_section("Top Items", top_items[:5]),
                _format_section("Top Cities", top_cities[:5]),
            ]
        )
        return (
            f"{_SLIDES_INSTRUCTIONS}\n"
            f"# PROVIDED DATA\n\n{sections}\n"
            f"# OUTPUT SCHEMA\n\n```json\n{_SLIDES_SCHEMA_JSON}\n```\n\n"
            f"# TASK\n\n"
            f'Create a 4-slide business presentation for "{domain}" for {month} {year}. '
            f"Follow the schema precisely."
        )
