from database.connection import Base
from models.event_template import EventTemplate
from models.event import Event
from models.event_host import EventHost
from models.qr_roll import QrRoll
from models.qr_claim import QrClaim
from models.transaction import Transaction, TransactionStatus
from models.admin_user import AdminUser

__all__ = [
    "Base", "EventTemplate", "Event", "EventHost", "QrRoll", "QrClaim",
    "Transaction", "TransactionStatus", "AdminUser",
]
