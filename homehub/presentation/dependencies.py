"""
Request Dependencies - Presentation Layer

FastAPI dependencies shared by the routers.
"""

from typing import Optional

from fastapi import Header, Query

from homehub.shared.consts import DEMO_MODE_HEADER

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def get_demo_mode(
    demo_header: Optional[str] = Header(
        default=None,
        alias=DEMO_MODE_HEADER,
        description="Address the demo universe instead of the real backends",
    ),
    demo: Optional[str] = Query(
        default=None, description="Same as the demo mode header"
    ),
) -> bool:
    """
    Demo flag of the request.

    The header wins over the query parameter when both are present.
    """
    if demo_header is not None:
        return parse_flag(demo_header)
    return parse_flag(demo)
