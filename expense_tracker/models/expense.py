from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, List, Optional

AUTO_CATEGORY = "Auto"
OTHER_CATEGORY = "Other"

# Surrounding whitespace is stripped first, so a blank label is rejected
CategoryLabel = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ExpenseCreate(BaseModel):
    amount: float = Field(gt=0)
    category: CategoryLabel  # "Auto" asks for a suggestion, "Other" uses custom_category
    custom_category: Optional[str] = ""
    description: Optional[str] = ""


class ExpenseInDB(BaseModel):
    amount: float = Field(gt=0)
    category: CategoryLabel
    description: Optional[str] = ""


class ExpensePublic(BaseModel):
    index: int
    amount: float
    category: str
    description: Optional[str] = ""


class ExpenseList(BaseModel):
    expenses: List[ExpensePublic]
    total_income: float
    total_expenses: float
