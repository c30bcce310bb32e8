from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medsales.core.database import get_db
from medsales.core.exceptions import NotFoundError, ValidationError
from medsales.core.logger import logger
from medsales.core.middleware import user_is_admin
from medsales.models.setting import SiteSetting
from medsales.models.user import User
from medsales.schemas import ApiResponse
from medsales.schemas.setting import (
    SettingResponse,
    SettingsBatchResponse,
    SettingsBatchUpdate,
    SettingUpdate,
    SettingValue,
)

router = APIRouter(prefix="/settings", tags=["settings"])


def to_response(setting: SiteSetting) -> SettingResponse:
    return SettingResponse(
        key=setting.setting_key,
        value=setting.setting_value or "",
        description=setting.description or "",
    )


@router.get("")
async def get_settings(
    keys: Optional[str] = None,
    db: Session = Depends(get_db),
) -> ApiResponse[dict[str, SettingValue]]:
    """Get site settings, optionally limited to a comma separated list of keys"""
    key_list = [key.strip() for key in keys.split(",") if key.strip()] if keys else None
    settings = SiteSetting.get_many(db, key_list)
    return ApiResponse(
        data={
            setting.setting_key: SettingValue(
                value=setting.setting_value or "",
                description=setting.description or "",
            )
            for setting in settings
        }
    )


@router.get("/{key}")
async def get_setting(
    key: str,
    db: Session = Depends(get_db),
) -> ApiResponse[SettingResponse]:
    """Get a single setting"""
    setting = SiteSetting.get(db, setting_key=key)
    if not setting:
        raise NotFoundError("Setting not found")
    return ApiResponse(data=to_response(setting))


@router.put("/{key}")
async def update_setting(
    key: str,
    data: SettingUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_admin),
) -> ApiResponse[SettingResponse]:
    """Create or update a single setting"""
    if data.value is None:
        raise ValidationError("Setting value is required")

    setting = SiteSetting.upsert(db, key, data.value, data.description)
    setting.save(db)
    logger.info(f"Updated setting {key}")
    return ApiResponse(data=to_response(setting))


@router.put("")
async def update_settings(
    data: SettingsBatchUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_admin),
) -> ApiResponse[SettingsBatchResponse]:
    """Create or update several settings in one transaction"""
    if not data.settings:
        raise ValidationError("Settings object is required")

    rows = [
        SiteSetting.upsert(db, key, value) for key, value in data.settings.items()
    ]
    SiteSetting.save_all(db, rows)
    logger.info(f"Updated {len(rows)} settings")
    return ApiResponse(
        data=SettingsBatchResponse(
            updated=[to_response(row) for row in rows],
            message=f"{len(rows)} settings updated successfully",
        )
    )
