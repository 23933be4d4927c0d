from enum import Enum


class ServiceRequestStatus(str, Enum):

    new = "New"
    in_progress = "In Progress"
    resolved = "Resolved"
    closed = "Closed"


class ServiceRequestSource(str, Enum):

    whatsapp = "WhatsApp"
    web = "Web"
