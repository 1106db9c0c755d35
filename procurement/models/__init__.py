# importing the package registers every table on Base.metadata
from procurement.models.employee import Employee, Organization, OrganizationResponsible
from procurement.models.tender import TenderRecord, TenderHistoryRecord
from procurement.models.bid import BidRecord, BidHistoryRecord
from procurement.models.decision import DecisionRecord
from procurement.models.review import ReviewRecord

__all__ = [
    "Employee",
    "Organization",
    "OrganizationResponsible",
    "TenderRecord",
    "TenderHistoryRecord",
    "BidRecord",
    "BidHistoryRecord",
    "DecisionRecord",
    "ReviewRecord",
]
