"""MCP tools for USPS Web Tools.

Each tool reads the USPS credential, builds one request document, sends
it through the lifespan-owned UspsClient and reduces the XML response to
a small dict. An <Error> element in the response becomes an
``{"error": description}`` result rather than a failed tool call;
configuration and transport failures propagate.
"""

import logging
from typing import Annotated

from fastmcp import Context
from pydantic import Field

from usps_mcp import request_builder
from usps_mcp.client import UspsClient
from usps_mcp.config import get_user_id
from usps_mcp.errors import ExternalServiceError
from usps_mcp.models import (
    CityStateResult,
    RateQuote,
    ServiceType,
    TrackEvent,
    TrackingResult,
    TrackSummary,
    UspsApi,
    ValidatedAddress,
    ZipCodeResult,
)
from usps_mcp.xml_tags import extract_all, extract_first

logger = logging.getLogger(__name__)


def _get_client(ctx: Context) -> UspsClient:
    """Get the shared USPS client from the lifespan context.

    Raises:
        RuntimeError: If request context not available
    """
    if ctx.request_context is None:
        raise RuntimeError("Request context not available")
    return ctx.request_context.lifespan_context["client"]


async def _call(ctx: Context, api: UspsApi, xml: str) -> str:
    await ctx.info(f"Calling USPS {api.value}")
    return await _get_client(ctx).fetch(api.value, xml)


def _service_error(body: str) -> dict | None:
    error = ExternalServiceError.from_response(body)
    if error is None:
        return None
    logger.info("USPS returned error %s: %s", error.number or "-", error.description)
    return error.to_payload()


def _track_event_fields(block: str) -> dict[str, str]:
    return {
        "event": extract_first(block, "Event"),
        "event_date": extract_first(block, "EventDate"),
        "event_time": extract_first(block, "EventTime"),
        "event_city": extract_first(block, "EventCity"),
        "event_state": extract_first(block, "EventState"),
    }


async def validate_address(
    address2: Annotated[str, Field(description="Street address (USPS calls this Address2)")],
    city: Annotated[str, Field(description="City")],
    state: Annotated[str, Field(description="2-letter state code")],
    ctx: Context,
    address1: Annotated[
        str | None, Field(description="Apartment/Suite (USPS calls this Address1)")
    ] = None,
    zip5: Annotated[str | None, Field(description="5-digit ZIP")] = None,
) -> dict:
    """Validate and standardize a US address via USPS.

    Returns:
        Dictionary with address1, address2, city, state, zip5 and zip4,
        or {"error": description} when USPS rejects the address.

    Example:
        >>> result = await validate_address("1600 Pennsylvania Ave NW", "Washington", "DC", ctx)
        >>> print(result["zip5"])
        20500
    """
    xml = request_builder.address_validate_request(
        get_user_id(), address2, city, state, address1=address1, zip5=zip5
    )
    body = await _call(ctx, UspsApi.VERIFY, xml)

    if error := _service_error(body):
        return error

    return ValidatedAddress(
        address1=extract_first(body, "Address1"),
        address2=extract_first(body, "Address2"),
        city=extract_first(body, "City"),
        state=extract_first(body, "State"),
        zip5=extract_first(body, "Zip5"),
        zip4=extract_first(body, "Zip4"),
    ).model_dump()


async def lookup_zipcode(
    city: str,
    state: Annotated[str, Field(description="2-letter state code")],
    ctx: Context,
) -> dict:
    """Look up ZIP code for a city/state.

    Args:
        city: City name
        state: 2-letter state code

    Returns:
        Dictionary with city, state, zip5 and zip4 as USPS standardizes
        them, or {"error": description} when USPS cannot resolve the pair.

    Example:
        >>> result = await lookup_zipcode("Beverly Hills", "CA", ctx)
        >>> print(result["zip5"])
        90210
    """
    xml = request_builder.zip_code_lookup_request(get_user_id(), city, state)
    body = await _call(ctx, UspsApi.ZIP_CODE_LOOKUP, xml)

    if error := _service_error(body):
        return error

    return ZipCodeResult(
        city=extract_first(body, "City"),
        state=extract_first(body, "State"),
        zip5=extract_first(body, "Zip5"),
        zip4=extract_first(body, "Zip4"),
    ).model_dump()


async def city_state_lookup(
    zip5: Annotated[str, Field(description="5-digit ZIP code")],
    ctx: Context,
) -> dict:
    """Look up city and state for a ZIP code.

    Args:
        zip5: 5-digit ZIP code

    Returns:
        Dictionary with zip5, city and state, or {"error": description}
        when USPS rejects the ZIP code.
    """
    xml = request_builder.city_state_lookup_request(get_user_id(), zip5)
    body = await _call(ctx, UspsApi.CITY_STATE_LOOKUP, xml)

    if error := _service_error(body):
        return error

    return CityStateResult(
        zip5=extract_first(body, "Zip5"),
        city=extract_first(body, "City"),
        state=extract_first(body, "State"),
    ).model_dump()


async def track_package(
    trackingNumber: Annotated[str, Field(description="USPS tracking number")],
    ctx: Context,
) -> dict:
    """Track a USPS package by tracking number.

    Returns:
        Dictionary with:
        - summary: latest event (event, eventDate, eventTime, eventCity,
          eventState, eventZip)
        - details: earlier events in the order USPS lists them
        or {"error": description} when USPS has no record of the number.
    """
    xml = request_builder.track_field_request(get_user_id(), trackingNumber)
    body = await _call(ctx, UspsApi.TRACK, xml)

    if error := _service_error(body):
        return error

    summary_block = extract_first(body, "TrackSummary")
    detail_blocks = extract_all(body, "TrackDetail")

    result = TrackingResult(
        summary=TrackSummary(
            **_track_event_fields(summary_block),
            event_zip=extract_first(summary_block, "EventZIPCode"),
        ),
        details=[TrackEvent(**_track_event_fields(d)) for d in detail_blocks],
    )
    return result.model_dump(by_alias=True)


async def calculate_rate(
    zipFrom: Annotated[str, Field(description="Origin 5-digit ZIP")],
    zipTo: Annotated[str, Field(description="Destination 5-digit ZIP")],
    ctx: Context,
    service: ServiceType = ServiceType.PRIORITY,
    pounds: Annotated[float, Field(ge=0)] = 0,
    ounces: Annotated[float, Field(ge=0)] = 0,
    container: Annotated[
        str | None,
        Field(description="Container type (e.g. 'FLAT RATE BOX', 'FLAT RATE ENVELOPE')"),
    ] = None,
) -> dict:
    """Calculate USPS shipping rate for a domestic package.

    Args:
        zipFrom: Origin 5-digit ZIP
        zipTo: Destination 5-digit ZIP
        service: One of the six ServiceType names (default PRIORITY)
        pounds: Whole or fractional pounds
        ounces: Additional ounces
        container: USPS container name, empty for variable packaging

    Returns:
        Dictionary with:
        - service: MailService name as returned by USPS
        - rate: postage in USD
        - commitments: delivery commitment name (e.g. "2-Day")
        or {"error": description} when USPS cannot rate the package.
    """
    xml = request_builder.rate_v4_request(
        get_user_id(),
        service,
        zipFrom,
        zipTo,
        pounds=pounds,
        ounces=ounces,
        container=container,
    )
    body = await _call(ctx, UspsApi.RATE, xml)

    if error := _service_error(body):
        return error

    return RateQuote(
        service=extract_first(body, "MailService"),
        rate=extract_first(body, "Rate"),
        commitments=extract_first(body, "CommitmentName"),
    ).model_dump()
