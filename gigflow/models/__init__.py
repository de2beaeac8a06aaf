from gigflow.models.user import User
from gigflow.models.gig import Gig
from gigflow.models.bid import Bid

__all__ = ["User", "Gig", "Bid"]
