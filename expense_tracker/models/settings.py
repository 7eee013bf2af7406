from pydantic import BaseModel, Field


class IncomeUpdate(BaseModel):
    income: float = Field(ge=0)


class IncomePublic(BaseModel):
    income: float


class ThemeSettings(BaseModel):
    dark_mode: bool
