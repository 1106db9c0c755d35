from procurement.schemas.primitives import CamelModel, parse_body
from procurement.schemas.tender import TenderNew, TenderPatch, TenderOut
from procurement.schemas.bid import BidNew, BidPatch, BidOut, ReviewOut
