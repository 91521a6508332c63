from typing import Any, List, Optional
from pydantic import BaseModel, field_validator


class RecipeData(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: List[str] = []  # in the order printed on the card
    instructions: List[str] = []  # one entry per step

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _as_str_list(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(x) for x in v if x is not None]
