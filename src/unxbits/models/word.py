from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, Optional, Union

FieldValue = Optional[Union[bool, int]]


class DecodedWord(BaseModel):
    plan: str | None = None
    word: int = Field(..., ge=0)
    width_bits: int = Field(..., ge=1, le=64)
    fields: Dict[str, FieldValue] = Field(default_factory=dict)
    reserved_set: bool = False

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]
