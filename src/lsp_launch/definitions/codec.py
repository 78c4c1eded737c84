"""Conversion between launch definitions and their flat string form.

The flat form is what an editor works with: one string per schema field, in
schema order, with token lists rendered as a shell-quoted command line. The
record form is what the store persists: a mapping with a ``type`` key and
token lists kept as lists.
"""

import logging
import shlex
from collections.abc import Mapping, Sequence
from typing import Any

from .base import (
    DEFINITION_TYPES,
    EXTENSION,
    FIELD_SCHEMAS,
    LIST_FIELDS,
    LaunchDefinition,
    VariantTag,
    normalize_extension,
    parse_tag,
)
from .logging import log_unknown_variant

logger = logging.getLogger(__name__)

TYPE_KEY = "type"


def join_tokens(tokens: Sequence[str]) -> str:
    return shlex.join(tokens)


def split_tokens(text: str) -> list[str] | None:
    """Split a shell-style line into tokens, or None if the quoting is unbalanced."""
    try:
        return shlex.split(text)
    except ValueError:
        return None


def decompose(definition: LaunchDefinition) -> tuple[VariantTag, list[str]]:
    """Flatten a definition into its tag and field values in schema order."""
    values: list[str] = []
    for name, value in definition.fields().items():
        if name in LIST_FIELDS:
            values.append(join_tokens(value))
        else:
            values.append(value)  # type: ignore[arg-type]
    return definition.tag, values


def compose(
    tag: str | VariantTag,
    values: Sequence[str],
    *,
    source: str = "compose",
) -> LaunchDefinition | None:
    """Build a definition from a tag and field values in schema order.

    Returns None when the values do not form a valid definition for the tag:
    unknown tag, wrong number of values, non-string values, unbalanced quoting
    in a token list, or an empty extension. Unknown tags are also reported.
    """
    variant = parse_tag(tag)
    if variant is None:
        logger.warning("Unknown launch definition type: %r", tag)
        log_unknown_variant(str(tag), source)
        return None

    schema = FIELD_SCHEMAS[variant]
    if isinstance(values, str) or len(values) != len(schema):
        logger.debug(
            "Expected %d values for %s, got %r", len(schema), variant.value, values
        )
        return None

    kwargs: dict[str, Any] = {}
    for name, value in zip(schema, values, strict=True):
        if not isinstance(value, str):
            return None
        if name in LIST_FIELDS:
            tokens = split_tokens(value)
            if tokens is None:
                logger.debug("Unbalanced quoting in %s field: %r", name, value)
                return None
            kwargs[name] = tokens
        else:
            kwargs[name] = value

    if not normalize_extension(kwargs[EXTENSION]):
        return None
    return DEFINITION_TYPES[variant](**kwargs)


def to_array(definition: LaunchDefinition) -> list[str]:
    """Flatten a definition into a single array, tag first."""
    tag, values = decompose(definition)
    return [tag.value, *values]


def from_array(array: Sequence[str]) -> LaunchDefinition | None:
    if not array:
        return None
    return compose(array[0], array[1:], source="array")


def to_record(definition: LaunchDefinition) -> dict[str, Any]:
    """Build the persisted record; the extension is the key it is stored under."""
    record: dict[str, Any] = {TYPE_KEY: definition.tag.value}
    for name, value in definition.fields().items():
        if name == EXTENSION:
            continue
        record[name] = list(value) if name in LIST_FIELDS else value
    return record


def from_record(extension: str, record: Mapping[str, Any]) -> LaunchDefinition | None:
    """Rebuild a definition from a persisted record.

    Missing fields default to empty. Records with a non-string scalar or a token
    list that is not a list of strings are rejected.
    """
    tag = record.get(TYPE_KEY)
    variant = parse_tag(tag) if isinstance(tag, str) else None
    if variant is None:
        logger.warning("Unknown launch definition type for %r: %r", extension, tag)
        log_unknown_variant(str(tag), "record")
        return None

    values: list[str] = []
    for name in FIELD_SCHEMAS[variant]:
        if name == EXTENSION:
            values.append(extension)
            continue
        raw = record.get(name)
        if name in LIST_FIELDS:
            if raw is None:
                raw = []
            if not isinstance(raw, list) or not all(isinstance(t, str) for t in raw):
                return None
            values.append(join_tokens(raw))
        else:
            if raw is None:
                raw = ""
            if not isinstance(raw, str):
                return None
            values.append(raw)
    return compose(variant, values, source="record")
