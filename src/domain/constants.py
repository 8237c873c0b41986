"""Domain enumerations for the debt ledger."""

from enum import Enum


class TransactionType(str, Enum):
    """Kind of ledger event. Direction is carried here, never by sign."""

    BORROWED = "borrowed"
    LENT = "lent"
    PAYMENT = "payment"
    PARTIAL_PAYMENT = "partial-payment"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """Spending category attached to a transaction."""

    FOOD = "food"
    ENTERTAINMENT = "entertainment"
    RENT = "rent"
    TRANSPORTATION = "transportation"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    TRAVEL = "travel"
    OTHER = "other"


class RecurrenceInterval(str, Enum):
    """Period between two instances of a recurring template."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


DEBT_TYPES = (TransactionType.BORROWED, TransactionType.LENT)

_CATEGORY_LABELS = {
    TransactionCategory.FOOD: "Yemek",
    TransactionCategory.ENTERTAINMENT: "Eğlence",
    TransactionCategory.RENT: "Kira",
    TransactionCategory.TRANSPORTATION: "Ulaşım",
    TransactionCategory.SHOPPING: "Alışveriş",
    TransactionCategory.UTILITIES: "Faturalar",
    TransactionCategory.HEALTHCARE: "Sağlık",
    TransactionCategory.EDUCATION: "Eğitim",
    TransactionCategory.TRAVEL: "Seyahat",
    TransactionCategory.OTHER: "Diğer",
}

_RECURRENCE_LABELS = {
    RecurrenceInterval.DAILY: "Her gün",
    RecurrenceInterval.WEEKLY: "Her hafta",
    RecurrenceInterval.BIWEEKLY: "İki haftada bir",
    RecurrenceInterval.MONTHLY: "Her ay",
    RecurrenceInterval.QUARTERLY: "Üç ayda bir",
    RecurrenceInterval.YEARLY: "Her yıl",
}


def category_label(category: TransactionCategory) -> str:
    """Return the display label of a category."""
    return _CATEGORY_LABELS[TransactionCategory(category)]


def recurrence_label(interval: RecurrenceInterval) -> str:
    """Return the display label of a recurrence interval."""
    return _RECURRENCE_LABELS[RecurrenceInterval(interval)]


__all__ = [
    "TransactionType",
    "TransactionCategory",
    "RecurrenceInterval",
    "DEBT_TYPES",
    "category_label",
    "recurrence_label",
]
