from pydantic import BaseModel


class DashboardSummaryOut(BaseModel):
    totalProducts: int
    totalOrders: int
    totalCategories: int
    totalRevenue: float
