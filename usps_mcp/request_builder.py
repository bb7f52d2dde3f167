"""Request document builders for USPS Web Tools.

Each builder returns the XML text for one API call. Documents are built
from nested dicts with xmltodict, so caller-supplied values are escaped
and cannot break out of their element. Element order follows the USPS
schemas, which reject out-of-order children.
"""

import xmltodict

from usps_mcp.models import ServiceType


def _render(document: dict) -> str:
    return xmltodict.unparse(
        document,
        full_document=False,
        short_empty_elements=False,
    )


def _number(value: float) -> str:
    """Render 2.0 as "2" and 2.5 as "2.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def address_validate_request(
    user_id: str,
    address2: str,
    city: str,
    state: str,
    address1: str | None = None,
    zip5: str | None = None,
) -> str:
    """Build an AddressValidateRequest (API=Verify).

    USPS swaps the usual meaning of the address lines: Address1 is the
    apartment/suite and Address2 the street line.
    """
    return _render({
        "AddressValidateRequest": {
            "@USERID": user_id,
            "Address": {
                "Address1": address1 or "",
                "Address2": address2,
                "City": city,
                "State": state,
                "Zip5": zip5 or "",
                "Zip4": "",
            },
        }
    })


def zip_code_lookup_request(user_id: str, city: str, state: str) -> str:
    """Build a ZipCodeLookupRequest (API=ZipCodeLookup)."""
    return _render({
        "ZipCodeLookupRequest": {
            "@USERID": user_id,
            "Address": {
                "Address1": "",
                "Address2": "",
                "City": city,
                "State": state,
            },
        }
    })


def city_state_lookup_request(user_id: str, zip5: str) -> str:
    """Build a CityStateLookupRequest (API=CityStateLookup)."""
    return _render({
        "CityStateLookupRequest": {
            "@USERID": user_id,
            "ZipCode": {"Zip5": zip5},
        }
    })


def track_field_request(user_id: str, tracking_number: str) -> str:
    """Build a TrackFieldRequest (API=TrackV2)."""
    return _render({
        "TrackFieldRequest": {
            "@USERID": user_id,
            "TrackID": {"@ID": tracking_number},
        }
    })


def rate_v4_request(
    user_id: str,
    service: ServiceType,
    zip_from: str,
    zip_to: str,
    pounds: float = 0,
    ounces: float = 0,
    container: str | None = None,
) -> str:
    """Build a single-package RateV4Request (API=RateV4)."""
    return _render({
        "RateV4Request": {
            "@USERID": user_id,
            "Package": {
                "@ID": "1",
                "Service": ServiceType(service).value,
                "ZipOrigination": zip_from,
                "ZipDestination": zip_to,
                "Pounds": _number(pounds),
                "Ounces": _number(ounces),
                "Container": container or "",
                "Machinable": "true",
            },
        }
    })
