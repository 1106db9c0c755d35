#procurement/models/enums.py
from __future__ import annotations
from enum import Enum


class TenderStatus(str, Enum):
    CREATED = "Created"
    PUBLISHED = "Published"
    CLOSED = "Closed"


class BidStatus(str, Enum):
    CREATED = "Created"
    PUBLISHED = "Published"
    CANCELED = "Canceled"


class ServiceType(str, Enum):
    CONSTRUCTION = "Construction"
    DELIVERY = "Delivery"
    MANUFACTURE = "Manufacture"


class AuthorType(str, Enum):
    USER = "User"
    ORGANIZATION = "Organization"


class DecisionType(str, Enum):
    APPROVED = "Approved"
    REJECTED = "Rejected"


class OrganizationType(str, Enum):
    IE = "IE"
    LLC = "LLC"
    JSC = "JSC"
