# roamy/models/facts.py
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WeatherSummary(BaseModel):
    forecast: str
    condition: Optional[str] = None
    temperature_c: Optional[float] = None
    temp_min_c: Optional[float] = None
    temp_max_c: Optional[float] = None


class LocalCurrency(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    code: str = ""
    # Live rates are numbers; model-authored ones may be prose ("1 USD = 0.92 EUR").
    exchange_rate: Optional[Union[float, str]] = Field(default=None, alias="exchangeRate")

    @field_validator("exchange_rate", mode="before")
    @classmethod
    def _rate(cls, value):
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        text = str(value).strip()
        if not text:
            return None
        try:
            return float(text.replace(",", ""))
        except ValueError:
            return text

    @field_validator("code", mode="before")
    @classmethod
    def _code_as_str(cls, value):
        return "" if value is None else str(value)


class EmergencyContacts(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    police: str = ""
    ambulance: str = ""
    tourist_police: Optional[str] = Field(default=None, alias="touristPolice")

    @field_validator("police", "ambulance", mode="before")
    @classmethod
    def _number_as_str(cls, value):
        return "" if value is None else str(value)

    @field_validator("tourist_police", mode="before")
    @classmethod
    def _optional_number_as_str(cls, value):
        return None if value is None else str(value)


class DestinationFacts(BaseModel):
    destination: str
    country_code: Optional[str] = None
    weather: WeatherSummary
    currency: LocalCurrency
    emergency: EmergencyContacts
