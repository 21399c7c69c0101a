"""Pydantic models for push audience filter expressions.

The push service accepts a flat, ordered list of tag conditions and boolean
operators. There is no way to nest groups, so token order is significant.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from models.types import TagKey

TAG_SET_VALUE = "1"


class TagCondition(BaseModel):
    """Condition on a single subscriber tag."""

    model_config = ConfigDict(frozen=True)

    field: Literal["tag"] = "tag"
    key: TagKey
    relation: Literal["=", "not_exists"]
    value: Optional[str] = None

    @classmethod
    def equals(cls, key: str, value: str = TAG_SET_VALUE) -> "TagCondition":
        """Subscriber has opted into this tag."""
        return cls(key=TagKey(key), relation="=", value=value)

    @classmethod
    def not_exists(cls, key: str) -> "TagCondition":
        """Subscriber has never set this tag."""
        return cls(key=TagKey(key), relation="not_exists")


class FilterOperator(BaseModel):
    """Boolean operator between two conditions."""

    model_config = ConfigDict(frozen=True)

    operator: Literal["OR", "AND"]


OR = FilterOperator(operator="OR")
AND = FilterOperator(operator="AND")

FilterToken = Union[TagCondition, FilterOperator]
FilterExpression = list[FilterToken]


def filters_to_wire(expression: FilterExpression) -> list[dict[str, str]]:
    """Convert a filter expression into the JSON list sent to the push service."""
    return [token.model_dump(exclude_none=True) for token in expression]
