from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from arttouch_admin.database import get_db
from arttouch_admin.schemas.dashboard import DashboardSummaryOut
from arttouch_admin.services.dashboard import get_dashboard_summary
from arttouch_admin.utils.http import unwrap
from arttouch_admin.utils.security import require_admin


router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummaryOut)
def get_dashboard_overview(db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    summary = unwrap(get_dashboard_summary(db))
    return DashboardSummaryOut(
        totalProducts=summary["total_products"],
        totalOrders=summary["total_orders"],
        totalCategories=summary["total_categories"],
        totalRevenue=summary["total_revenue"],
    )
