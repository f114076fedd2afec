"""
Pydantic schemas split by domain.

Re-exports every schema so callers can use `from spending_tracker.db import schemas`.
"""

from .common import ApiModel, Money, Page, total_pages
from .categories import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    Category,
    CategoryWithCount,
    CategorySummary,
)
from .budgets import (
    BudgetCategory,
    BudgetBase,
    BudgetCreate,
    BudgetUpdate,
    Budget,
    BudgetSummary,
    BudgetPage,
)
from .expenses import (
    ExpenseSortField,
    SortOrder,
    ExpenseBase,
    ExpenseCreate,
    ExpenseUpdate,
    Expense,
    ExpensePage,
    CategoryBreakdown,
    DateRange,
    ExpenseSummary,
)
from .calculator import (
    BinaryOperationRequest,
    UnaryOperationRequest,
    BinaryOperationResult,
    UnaryOperationResult,
    CalculationMetadata,
    CalculationResponse,
    OperationInfo,
    OperationCatalog,
)
from .calendar import CalendarDay, CalendarMonth
from .health import HealthCheck, HealthStatus, MemoryUsage, AppInfo
from .errors import ErrorResponse

__all__ = [
    "ApiModel", "Money", "Page", "total_pages",
    "CategoryBase", "CategoryCreate", "CategoryUpdate", "Category", "CategoryWithCount", "CategorySummary",
    "BudgetCategory", "BudgetBase", "BudgetCreate", "BudgetUpdate", "Budget", "BudgetSummary", "BudgetPage",
    "ExpenseSortField", "SortOrder", "ExpenseBase", "ExpenseCreate", "ExpenseUpdate", "Expense",
    "ExpensePage", "CategoryBreakdown", "DateRange", "ExpenseSummary",
    "BinaryOperationRequest", "UnaryOperationRequest", "BinaryOperationResult", "UnaryOperationResult",
    "CalculationMetadata", "CalculationResponse", "OperationInfo", "OperationCatalog",
    "CalendarDay", "CalendarMonth",
    "HealthCheck", "HealthStatus", "MemoryUsage", "AppInfo",
    "ErrorResponse",
]
