from enum import Enum


class ProfileRole(str, Enum):

    admin = "admin"
    tenant = "tenant"


class RequesterStatus(str, Enum):

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ApprovalAction(str, Enum):

    approve = "approve"
    reject = "reject"
