"""Trim raw NPS records down to the fields returned to callers."""

from typing import Any, Dict, Iterable, List, Optional


def _names(items: Optional[Iterable[Dict[str, Any]]]) -> List[str]:
    return [item.get("name", "") for item in items or [] if item.get("name")]


def _split_states(states: Optional[str]) -> List[str]:
    if not states:
        return []
    return [state.strip() for state in states.split(",") if state.strip()]


def _location(record: Dict[str, Any]) -> Optional[Dict[str, str]]:
    latitude = record.get("latitude")
    longitude = record.get("longitude")
    if not latitude or not longitude:
        return None
    return {"latitude": latitude, "longitude": longitude}


def _contacts(record: Dict[str, Any]) -> Dict[str, List[str]]:
    contacts = record.get("contacts") or {}
    return {
        "phoneNumbers": [
            f"{phone.get('type', 'Phone')}: {phone.get('phoneNumber', '')}".strip()
            for phone in contacts.get("phoneNumbers") or []
            if phone.get("phoneNumber")
        ],
        "emailAddresses": [
            email["emailAddress"]
            for email in contacts.get("emailAddresses") or []
            if email.get("emailAddress")
        ],
    }


def _operating_hours(record: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {
            "name": hours.get("name", ""),
            "description": hours.get("description", ""),
            "standardHours": hours.get("standardHours") or {},
        }
        for hours in record.get("operatingHours") or []
    ]


def format_park_summary(park: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": park.get("fullName", ""),
        "code": park.get("parkCode", ""),
        "description": park.get("description", ""),
        "states": _split_states(park.get("states")),
        "url": park.get("url", ""),
        "designation": park.get("designation", ""),
        "activities": _names(park.get("activities")),
        "location": _location(park),
    }


def format_park_details(park: Dict[str, Any]) -> Dict[str, Any]:
    details = format_park_summary(park)
    details.update({
        "topics": _names(park.get("topics")),
        "weatherInfo": park.get("weatherInfo", ""),
        "directionsInfo": park.get("directionsInfo", ""),
        "directionsUrl": park.get("directionsUrl", ""),
        "entranceFees": [
            {
                "title": fee.get("title", ""),
                "cost": fee.get("cost", ""),
                "description": fee.get("description", ""),
            }
            for fee in park.get("entranceFees") or []
        ],
        "operatingHours": _operating_hours(park),
        "contacts": _contacts(park),
        "images": [
            {
                "url": image.get("url", ""),
                "title": image.get("title", ""),
                "altText": image.get("altText", ""),
                "credit": image.get("credit", ""),
            }
            for image in park.get("images") or []
        ],
    })
    return details


def format_alert(alert: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": alert.get("title", ""),
        "description": alert.get("description", ""),
        "category": alert.get("category", ""),
        "url": alert.get("url", ""),
        "parkCode": alert.get("parkCode", ""),
        "lastIndexedDate": alert.get("lastIndexedDate", ""),
    }


def format_visitor_center(center: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": center.get("name", ""),
        "parkCode": center.get("parkCode", ""),
        "description": center.get("description", ""),
        "url": center.get("url", ""),
        "directionsInfo": center.get("directionsInfo", ""),
        "location": _location(center),
        "operatingHours": _operating_hours(center),
        "contacts": _contacts(center),
    }


def format_campground(campground: Dict[str, Any]) -> Dict[str, Any]:
    campsites = campground.get("campsites") or {}
    return {
        "name": campground.get("name", ""),
        "parkCode": campground.get("parkCode", ""),
        "description": campground.get("description", ""),
        "url": campground.get("url", ""),
        "reservationUrl": campground.get("reservationUrl", ""),
        "reservationInfo": campground.get("reservationInfo", ""),
        "location": _location(campground),
        "totalSites": campsites.get("totalSites", ""),
        "amenities": campground.get("amenities") or {},
        "fees": [
            {"title": fee.get("title", ""), "cost": fee.get("cost", "")}
            for fee in campground.get("fees") or []
        ],
        "operatingHours": _operating_hours(campground),
    }


def format_event(event: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": event.get("title", ""),
        "parkCode": event.get("sitecode", ""),
        "parkName": event.get("parkfullname", ""),
        "description": event.get("description", ""),
        "location": event.get("location", ""),
        "dateStart": event.get("datestart", ""),
        "dateEnd": event.get("dateend", ""),
        "times": [
            {"start": time.get("timestart", ""), "end": time.get("timeend", "")}
            for time in event.get("times") or []
        ],
        "isFree": str(event.get("isfree", "")).lower() == "true",
        "feeInfo": event.get("feeinfo", ""),
        "url": event.get("infourl", ""),
    }


def group_by_park(records: List[Dict[str, Any]], key: str = "parkCode") -> Dict[str, List[Dict[str, Any]]]:
    """Group formatted records by park code, keeping first-seen park order."""
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        grouped.setdefault(record.get(key) or "unknown", []).append(record)
    return grouped
