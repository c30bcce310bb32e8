from typing import Optional, Union

from pydantic import field_validator

from medsales.schemas import BaseRequest, BaseResponse

Scalar = Union[str, bool, int, float]


def as_text(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingValue(BaseResponse):
    value: str
    description: str


class SettingResponse(SettingValue):
    key: str


class SettingUpdate(BaseRequest):
    value: Optional[Scalar] = None
    description: Optional[str] = None

    @field_validator("value")
    @classmethod
    def stringify_value(cls, v: Optional[Scalar]) -> Optional[str]:
        if v is None:
            return None
        return as_text(v)


class SettingsBatchUpdate(BaseRequest):
    settings: Optional[dict[str, Scalar]] = None

    @field_validator("settings")
    @classmethod
    def stringify_values(
        cls, v: Optional[dict[str, Scalar]]
    ) -> Optional[dict[str, str]]:
        if v is None:
            return None
        return {key: as_text(value) for key, value in v.items()}


class SettingsBatchResponse(BaseResponse):
    updated: list[SettingResponse]
    message: str
