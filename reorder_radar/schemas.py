from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ReorderStatus(str, Enum):
    SAFE = "Safe"
    WARNING = "Warning"
    CRITICAL = "Critical"


class SkuMetadata(BaseModel):
    """What the 15-character product code tells us about an item."""

    model_config = ConfigDict(frozen=True)

    item_type: str
    lead_time_days: int = Field(..., gt=0)
    is_seasonal_fit: bool


class InventoryRecord(BaseModel):
    """
    Defines the data contract for one product row of the reorder sheet.
    Records are rebuilt on every ingestion pass and never modified afterwards.
    Aliases are the camelCase names the dashboard and report consumers expect.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    category: str
    brand: str
    product_name: str = Field(..., min_length=1, alias="productName")
    barcode: str
    sku: str
    current_stock: int = Field(default=0, ge=0, alias="currentStock")
    in_production_stock: int = Field(default=0, ge=0, alias="inProductionStock")
    safety_stock: int = Field(default=0, ge=0, alias="safetyStock")
    reorder_point: int = Field(default=0, ge=0, alias="reorderPoint")
    current_week_sales: int = Field(default=0, ge=0, alias="currentWeekSales")
    last_week_sales: int = Field(default=0, ge=0, alias="lastWeekSales")
    daily_sales_avg: float = Field(default=0.0, ge=0, alias="dailySalesAvg")
    sales_growth: float = Field(default=0.0, alias="salesGrowth")
    days_to_stock_out: int = Field(..., ge=0, alias="daysToStockOut")
    lead_time_days: int = Field(..., gt=0, alias="leadTimeDays")
    unit_cost: int = Field(default=0, ge=0, alias="unitCost")
    status: ReorderStatus
    expected_stock_out_date: str = Field(..., alias="expectedStockOutDate")
    suggested_order_date: str = Field(..., alias="suggestedOrderDate")
    item_type: str = Field(..., alias="itemType")
    is_seasonal_fit: bool = Field(..., alias="isSeasonalFit")


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_items: int = Field(default=0, alias="totalItems")
    critical_count: int = Field(default=0, alias="criticalCount")
    warning_count: int = Field(default=0, alias="warningCount")
    safe_count: int = Field(default=0, alias="safeCount")
    # Critical items nobody has ordered yet.
    pending_critical_count: int = Field(default=0, alias="pendingCriticalCount")
    total_weekly_sales: int = Field(default=0, alias="totalWeeklySales")
    ordered_count: int = Field(default=0, alias="orderedCount")


class DashboardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    top_sellers: list[InventoryRecord]
    urgent_reorders: list[InventoryRecord]
    stats: DashboardStats


class RecommendationContextItem(BaseModel):
    """The slice of a record handed to the recommendation service."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    stock: int
    current_week_sales: int = Field(..., alias="currentWeekSales")
    last_week_sales: int = Field(..., alias="lastWeekSales")
    growth: str
    reorder_point: int = Field(..., alias="reorderPoint")
    lead_time: int = Field(..., alias="leadTime")


class Recommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(..., alias="productName")
    priority: str = "Medium"
    suggested_quantity: float = Field(default=0, alias="suggestedQuantity")
    reason: str = ""


class RecommendationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recommendations: list[Recommendation] = Field(default_factory=list)
    general_insights: str = Field(default="", alias="generalInsights")
