"""Parser configuration using Pydantic for validation."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field


class ParserConfig(BaseModel):
    """Options controlling grammar strictness and error policy.

    Attributes:
        collect_errors: Record statement errors and resynchronize at the next
            line break instead of failing on the first one.
        strict_symbols: Reject a name followed by anything other than '=',
            a string label, or '{' instead of treating it as an attribute.
        nested_array_values: Allow dictionaries and arrays as array elements.
        max_depth: Maximum nesting of blocks, dictionaries, and arrays.
    """

    collect_errors: bool = False
    strict_symbols: bool = False
    nested_array_values: bool = False
    max_depth: int = Field(default=64, ge=1, le=128)

    model_config = {"extra": "forbid"}


def load_config(config: ParserConfig | Mapping[str, Any] | None) -> ParserConfig:
    """Normalize None, a mapping, or a ParserConfig into a ParserConfig."""
    if config is None:
        return ParserConfig()
    if isinstance(config, ParserConfig):
        return config
    return ParserConfig.model_validate(dict(config))
