# Import every model so Base.metadata knows about all tables.
from zorax.db.session import Base  # noqa: F401
from zorax.models.users import User  # noqa: F401
from zorax.models.sessions import UserSession  # noqa: F401
from zorax.models.records import Expense, Gain  # noqa: F401
