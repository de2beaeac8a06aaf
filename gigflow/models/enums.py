#gigflow/models/enums.py
from __future__ import annotations
from enum import Enum


class GigStatus(str, Enum):
    open = "Open"
    assigned = "Assigned"


class BidStatus(str, Enum):
    pending = "Pending"
    hired = "Hired"
    rejected = "Rejected"
