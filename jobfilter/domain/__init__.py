"""Domain models for the LATAM remote-relevance classifier."""

from .models import (
    Assessment,
    ChannelVerdict,
    HiringRegion,
    MetadataField,
    RawPosting,
    WorkplaceType,
)

__all__ = [
    "RawPosting",
    "MetadataField",
    "WorkplaceType",
    "ChannelVerdict",
    "Assessment",
    "HiringRegion",
]
