"""Handlers behind the six park tools."""

import functools
from typing import Any, Dict, List

from loguru import logger

from nps_mcp.core.exceptions import NPSApiError, ToolErrorKind
from nps_mcp.schemas.tool_schemas import (
    FindParksArgs,
    GetAlertsArgs,
    GetCampgroundsArgs,
    GetEventsArgs,
    GetParkDetailsArgs,
    GetVisitorCentersArgs,
    ParkFilteredArguments,
)
from nps_mcp.services.nps_client import NPSClient
from nps_mcp.services.park_formatters import (
    format_alert,
    format_campground,
    format_event,
    format_park_details,
    format_park_summary,
    format_visitor_center,
    group_by_park,
)
from nps_mcp.services.tool_outcomes import HandlerOutcome, ToolFailure, ToolSuccess


def _total(response: Dict[str, Any], fallback: int) -> int:
    try:
        return int(response.get("total", fallback))
    except (TypeError, ValueError):
        return fallback


def _with_nps_client(handler):
    """Open an NPS client for one call and turn upstream failures into ToolFailure."""

    @functools.wraps(handler)
    async def wrapper(args) -> HandlerOutcome:
        try:
            async with NPSClient() as client:
                return await handler(client, args)
        except NPSApiError as exc:
            logger.warning(f"{handler.__name__} upstream failure: {exc.message}")
            return ToolFailure.of_kind(ToolErrorKind.SERVER_ERROR, message=exc.message)

    return wrapper


def _paged_listing(
    response: Dict[str, Any],
    args: ParkFilteredArguments,
    key: str,
    records: List[Dict[str, Any]],
) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "total": _total(response, len(records)),
        "limit": args.limit,
        "start": args.start,
        key: records,
    }
    if args.park_code is None:
        result[f"{key}ByPark"] = group_by_park(records)
    return result


@_with_nps_client
async def find_parks(client: NPSClient, args: FindParksArgs) -> HandlerOutcome:
    response = await client.get_parks(args.to_query())
    parks = [format_park_summary(park) for park in response.get("data") or []]

    wanted = args.activity_names
    if wanted:
        parks = [
            park for park in parks
            if any(name in activity.lower() for activity in park["activities"] for name in wanted)
        ]

    return ToolSuccess.of_json({
        "total": _total(response, len(parks)) if not wanted else len(parks),
        "limit": args.limit,
        "start": args.start,
        "parks": parks,
    })


@_with_nps_client
async def get_park_details(client: NPSClient, args: GetParkDetailsArgs) -> HandlerOutcome:
    response = await client.get_parks(args.to_query())
    data = response.get("data") or []
    if not data:
        return ToolFailure(
            error="NotFound",
            message=f"No park found with park code: {args.park_code}",
        )
    return ToolSuccess.of_json(format_park_details(data[0]))


@_with_nps_client
async def get_alerts(client: NPSClient, args: GetAlertsArgs) -> HandlerOutcome:
    response = await client.get_alerts(args.to_query())
    alerts = [format_alert(alert) for alert in response.get("data") or []]
    return ToolSuccess.of_json(_paged_listing(response, args, "alerts", alerts))


@_with_nps_client
async def get_visitor_centers(client: NPSClient, args: GetVisitorCentersArgs) -> HandlerOutcome:
    response = await client.get_visitor_centers(args.to_query())
    centers = [format_visitor_center(center) for center in response.get("data") or []]
    return ToolSuccess.of_json(_paged_listing(response, args, "visitorCenters", centers))


@_with_nps_client
async def get_campgrounds(client: NPSClient, args: GetCampgroundsArgs) -> HandlerOutcome:
    response = await client.get_campgrounds(args.to_query())
    campgrounds = [format_campground(campground) for campground in response.get("data") or []]
    return ToolSuccess.of_json(_paged_listing(response, args, "campgrounds", campgrounds))


@_with_nps_client
async def get_events(client: NPSClient, args: GetEventsArgs) -> HandlerOutcome:
    response = await client.get_events(args.to_query())
    events = [format_event(event) for event in response.get("data") or []]
    return ToolSuccess.of_json(_paged_listing(response, args, "events", events))
