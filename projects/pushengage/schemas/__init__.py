from projects.pushengage.schemas.notifications import SendNotificationRequest
from projects.pushengage.schemas.segments import AddSubscribersRequest, CreateSegmentRequest
from projects.pushengage.schemas.settings import ConnectSiteRequest, SiteStatusResponse

__all__ = [
    "SendNotificationRequest",
    "AddSubscribersRequest",
    "CreateSegmentRequest",
    "ConnectSiteRequest",
    "SiteStatusResponse",
]
