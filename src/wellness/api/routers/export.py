"""Full-data export endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from wellness.api.deps import get_current_user_id, get_db
from wellness.api.models import ApiResponse, ExportSnapshot
from wellness.db import Database
from wellness.tools.export import export_user_data

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("", response_model=ApiResponse[ExportSnapshot])
async def export_data(
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[ExportSnapshot]:
    """Everything the caller has recorded, unfiltered."""
    snapshot = await export_user_data(db, user_id)
    return ApiResponse[ExportSnapshot](data=ExportSnapshot(**snapshot))
