"""Models for the USPS MCP server."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UspsApi(str, Enum):
    """USPS Web Tools API selectors (the ``API`` query parameter)."""

    VERIFY = "Verify"
    ZIP_CODE_LOOKUP = "ZipCodeLookup"
    CITY_STATE_LOOKUP = "CityStateLookup"
    TRACK = "TrackV2"
    RATE = "RateV4"


class ServiceType(str, Enum):
    """Domestic mail services accepted by calculate_rate."""

    PRIORITY = "PRIORITY"
    EXPRESS = "EXPRESS"
    FIRST_CLASS = "FIRST CLASS"
    PARCEL = "PARCEL"
    LIBRARY = "LIBRARY"
    MEDIA = "MEDIA"


class ValidatedAddress(BaseModel):
    """Standardized address returned by the Verify API."""

    address1: str = Field(default="", description="Apartment/suite line")
    address2: str = Field(default="", description="Street line")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="2-letter state code")
    zip5: str = Field(default="", description="5-digit ZIP")
    zip4: str = Field(default="", description="ZIP+4 extension")


class ZipCodeResult(BaseModel):
    """ZIP code found for a city/state pair."""

    city: str = ""
    state: str = ""
    zip5: str = ""
    zip4: str = ""


class CityStateResult(BaseModel):
    """City and state found for a ZIP code."""

    zip5: str = ""
    city: str = ""
    state: str = ""


class TrackEvent(BaseModel):
    """One scan event from a TrackSummary or TrackDetail block."""

    model_config = ConfigDict(populate_by_name=True)

    event: str = Field(default="", description="Event description")
    event_date: str = Field(default="", alias="eventDate")
    event_time: str = Field(default="", alias="eventTime")
    event_city: str = Field(default="", alias="eventCity")
    event_state: str = Field(default="", alias="eventState")


class TrackSummary(TrackEvent):
    """Latest tracking event, which also carries the event ZIP."""

    event_zip: str = Field(default="", alias="eventZip")


class TrackingResult(BaseModel):
    """Tracking history for one package."""

    summary: TrackSummary = Field(default_factory=TrackSummary)
    details: list[TrackEvent] = Field(default_factory=list)


class RateQuote(BaseModel):
    """Postage quote for a single package."""

    service: str = Field(default="", description="MailService name as returned by USPS")
    rate: str = Field(default="", description="Postage in USD")
    commitments: str = Field(default="", description="Delivery commitment name")
