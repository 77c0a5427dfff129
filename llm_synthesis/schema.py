"""Structured output schemas for the column-mapping and slide-deck prompts."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ChartType = Literal["TopItemsChart", "BrandDistributionChart"]
SlideContentType = Literal["title", "kpi", "chart", "summary"]


class ColumnMappingOutput(BaseModel):
    """Canonical field -> source column name, as returned by the model.

    Unknown keys are ignored; every field may be missing or null.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    date: Optional[str] = None
    customer: Optional[str] = None
    item: Optional[str] = None
    quantity: Optional[str] = None
    price: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    revenue: Optional[str] = None
    brand: Optional[str] = None
    order_status: Optional[str] = Field(default=None, alias="orderStatus")
    cancellation_reason: Optional[str] = Field(default=None, alias="cancellationReason")
    courier: Optional[str] = None
    sku: Optional[str] = None
    article_type: Optional[str] = Field(default=None, alias="articleType")
    discount: Optional[str] = None
    order_id: Optional[str] = Field(default=None, alias="orderId")
    delivered_date: Optional[str] = Field(default=None, alias="deliveredDate")
    cancelled_date: Optional[str] = Field(default=None, alias="cancelledDate")
    return_date: Optional[str] = Field(default=None, alias="returnDate")

    def to_mapping(self) -> dict:
        return self.model_dump(by_alias=True)


class SlideContent(BaseModel):
    """One typed content block of a slide."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    type: SlideContentType
    title: Optional[str] = None
    text: Optional[str] = None
    chart_type: Optional[ChartType] = Field(default=None, alias="chartType")


class Slide(BaseModel):
    """A slide: title plus ordered content blocks."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    slide_title: str = Field(min_length=1, alias="slideTitle")
    content: List[SlideContent] = Field(default_factory=list)


class SlideDeck(BaseModel):
    """Ordered slides of one generated presentation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    slides: List[Slide] = Field(min_length=1)
