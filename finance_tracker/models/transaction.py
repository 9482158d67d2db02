"""
Transaction Models for the Finance Tracker

These models define the in-memory shape of every money movement the user
records. They are designed to:
1. Reject impossible records at construction (non-positive amounts,
   categories that do not belong to the transaction type)
2. Keep type-specific fields on the types that own them
3. Be serializable to the flat row shape used by the remote store

DESIGN DECISION: Updates are NOT loose dictionaries. An edit is expressed as
one of three update structs, discriminated by the transaction type, and is
validated before it can reach the storage boundary.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """The three kinds of money movement."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    LIABILITY = "LIABILITY"


class PaymentMethod(str, Enum):
    """How an expense was paid. Only meaningful for expenses."""
    CASH = "Cash"
    BKASH = "bKash"
    NAGAD = "Nagad"
    BANK = "Bank"


class IncomeSource(str, Enum):
    SALARY = "Salary"
    BUSINESS = "Business"
    SALE = "Sale"
    FREELANCING = "Freelancing"
    INVESTMENT = "Investment"
    GIFT = "Gift"
    RENTAL = "Rental"
    REFUND = "Refund"
    OTHERS = "Others"


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    RENT = "Rent"
    TRANSPORT = "Transport"
    BILL = "Bill"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    GROCERY = "Grocery"
    TOILETRIES = "Toiletries"
    INSURANCE = "Insurance"
    DONATION = "Donation"
    FAMILY = "Family"
    OTHERS = "Others"


class LiabilityCategory(str, Enum):
    """
    Borrowing and lending events.

    Each one moves cash and one of the two liability totals:
    - BORROW: cash in, debt up
    - REPAY: cash out, debt down
    - LEND: cash out, receivable up
    - COLLECT: cash in, receivable down
    """
    BORROW = "Borrow"
    LEND = "Lend"
    REPAY = "Repay"
    COLLECT = "Collect"


CATEGORIES_BY_TYPE: dict[TransactionType, type[Enum]] = {
    TransactionType.INCOME: IncomeSource,
    TransactionType.EXPENSE: ExpenseCategory,
    TransactionType.LIABILITY: LiabilityCategory,
}

DEFAULT_CATEGORY: dict[TransactionType, str] = {
    TransactionType.INCOME: IncomeSource.SALARY.value,
    TransactionType.EXPENSE: ExpenseCategory.FOOD.value,
    TransactionType.LIABILITY: LiabilityCategory.BORROW.value,
}


NOTE_MAX_LENGTH = 1000
PERSON_MAX_LENGTH = 200

# Up to 16 integer digits and 4 decimal places
AMOUNT_MAX_DIGITS = 20
AMOUNT_DECIMAL_PLACES = 4


def categories_for(transaction_type: TransactionType) -> list[str]:
    """Category values allowed for a transaction type, in display order."""
    return [member.value for member in CATEGORIES_BY_TYPE[transaction_type]]


def is_valid_category(transaction_type: TransactionType, category: str) -> bool:
    return category in categories_for(transaction_type)


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as submitted by the user, before it has an identity.

    Field names follow Python conventions; the persisted column for
    ``payment_method`` is ``paymentMethod`` and both spellings are accepted.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    date: dt.date = Field(
        ...,
        description="Calendar day of the transaction"
    )
    type: TransactionType = Field(
        ...,
        description="Income, expense or liability"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category from the enumeration matching the type"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Positive amount, currency-agnostic"
    )
    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        alias="paymentMethod",
        description="Payment method (expenses only)"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=NOTE_MAX_LENGTH,
        description="Free-text note"
    )
    person: Optional[str] = Field(
        default=None,
        max_length=PERSON_MAX_LENGTH,
        description="Counterpart of a borrow/lend (liabilities only)"
    )

    @field_validator("note", "person")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from form inputs as absent."""
        return v or None

    @model_validator(mode="after")
    def validate_type_fields(self) -> "TransactionDraft":
        """Category, payment method and person must agree with the type."""
        if not is_valid_category(self.type, self.category):
            raise ValueError(
                f"Category '{self.category}' is not valid for {self.type.value}"
            )
        if self.payment_method is not None and self.type != TransactionType.EXPENSE:
            raise ValueError("Payment method is only allowed on expenses")
        if self.person is not None and self.type != TransactionType.LIABILITY:
            raise ValueError("Person is only allowed on liabilities")
        return self


class Transaction(TransactionDraft):
    """
    A stored transaction.

    Identity is preserved across edits; ``id`` is minted once on creation.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Opaque unique identifier"
    )


# =============================================================================
# UPDATE MODELS - one struct per transaction type
# =============================================================================

class _UpdateBase(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    date: Optional[dt.date] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = Field(
        default=None,
        gt=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)

    @model_validator(mode="after")
    def validate_category(self):
        transaction_type = TransactionType(self.type)
        if self.category is not None and not is_valid_category(
            transaction_type, self.category
        ):
            raise ValueError(
                f"Category '{self.category}' is not valid for {transaction_type.value}"
            )
        return self


class IncomeUpdate(_UpdateBase):
    type: Literal["INCOME"] = "INCOME"


class ExpenseUpdate(_UpdateBase):
    type: Literal["EXPENSE"] = "EXPENSE"
    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        alias="paymentMethod",
    )


class LiabilityUpdate(_UpdateBase):
    type: Literal["LIABILITY"] = "LIABILITY"
    person: Optional[str] = Field(default=None, max_length=PERSON_MAX_LENGTH)


TransactionUpdate = Annotated[
    Union[IncomeUpdate, ExpenseUpdate, LiabilityUpdate],
    Field(discriminator="type"),
]


# =============================================================================
# DERIVED MODELS
# =============================================================================

class Summary(BaseModel):
    """
    Dashboard totals folded from a transaction list.

    Never persisted; recomputed on every read.
    """

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    total_debt: Decimal = Field(
        default=Decimal("0"),
        description="Amount I still need to repay"
    )
    total_receivable: Decimal = Field(
        default=Decimal("0"),
        description="Amount others still need to pay me"
    )
