from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from waysbucks.database import get_db
from waysbucks.models.product import Product
from waysbucks.models.profile import Profile
from waysbucks.models.user import User
from waysbucks.routers.dependencies import require_admin
from waysbucks.schemas.admin import AdminStatKV, AdminStatsResponse
from waysbucks.schemas.result import SuccessResult, success


router = APIRouter(prefix="/admin", tags=["admin"])

logger = logging.getLogger(__name__)


def _iso_now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/stats", response_model=SuccessResult[AdminStatsResponse])
def get_admin_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> SuccessResult[AdminStatsResponse]:
    logger.info("admin.stats user_id=%s", admin.id)

    accounts_total = int(db.query(func.count(User.id)).scalar() or 0)
    accounts_with_profile = int(db.query(func.count(Profile.id)).scalar() or 0)
    products_total = int(db.query(func.count(Product.id)).scalar() or 0)
    price_avg = db.query(func.avg(Product.price)).scalar()

    # Cities are grouped case-insensitively; any stored spelling serves as the label.
    city_key = func.lower(Profile.city)
    city_rows = (
        db.query(city_key.label("k"), func.min(Profile.city).label("label"), func.count(Profile.id).label("c"))
        .filter(Profile.city != "")
        .group_by(city_key)
        .order_by(func.count(Profile.id).desc(), city_key)
        .limit(10)
        .all()
    )
    top_cities = [AdminStatKV(key=key, label=label, count=int(c)) for key, label, c in city_rows]

    return success(
        AdminStatsResponse(
            generated_at=_iso_now(),
            accounts_total=accounts_total,
            accounts_with_profile=accounts_with_profile,
            products_total=products_total,
            product_price_avg=float(price_avg) if price_avg is not None else 0.0,
            top_cities=top_cities,
        )
    )
