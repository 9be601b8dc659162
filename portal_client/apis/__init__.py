from .accounting_api import AccountingApi
from .dashboard_api import DashboardApi
from .hr_api import HrApi
from .it_api import ItApi
from .marketing_api import MarketingApi
from .operations_api import OperationsApi
from .sales_api import SalesApi
from .user_api import UserApi

__all__ = [
    "AccountingApi",
    "DashboardApi",
    "HrApi",
    "ItApi",
    "MarketingApi",
    "OperationsApi",
    "SalesApi",
    "UserApi",
]
