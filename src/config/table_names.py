from enum import Enum


class TableNames(str, Enum):
    WEDDING_PROJECTS = "wedding_projects"
    RSVP_CONFIG = "rsvp_config"
    RSVP_RESPONSES = "rsvp_responses"
    WISHES_CONFIG = "wishes_config"
    GUEST_WISHES = "guest_wishes"
    WISH_RATE_LIMITS = "wish_rate_limits"
