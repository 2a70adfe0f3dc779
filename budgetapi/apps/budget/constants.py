import enum
from decimal import Decimal


class ConversionCurrency(str, enum.Enum):
    USD = "USD"
    TTD = "TTD"


# Stored budgets are kept in USD, TTD is the only conversion target
BASE_CURRENCY = ConversionCurrency.USD
TARGET_CURRENCY = ConversionCurrency.TTD

# Largest project id the storage column accepts (signed 64-bit)
MAX_PROJECT_ID = 2**63 - 1

# Money and rates are stored with two decimal places
CENT = Decimal("0.01")

REQUIRED_ADD_FIELDS = ("project_id", "project_name", "year", "currency")
REQUIRED_UPDATE_FIELDS = ("project_name", "year", "currency")
