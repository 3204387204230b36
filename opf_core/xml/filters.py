"""
XPath Filter Builders
=====================

Pure functions that turn query criteria into XPath predicate fragments.
Every builder returns an empty string when no criterion is given, so the
fragments can be concatenated onto a step unconditionally:

    expression = f"./opf:item{id_filter(ids)}{all_properties_filter(props)}"
"""

from typing import Any, List, Optional, Sequence, Union

Criteria = Optional[Union[str, Sequence[str]]]


def to_list(value: Any) -> List[Any]:
    """Normalize None, a scalar or a sequence into a list."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def xpath_literal(value: str) -> str:
    """
    Quote a string as an XPath 1.0 string literal.

    XPath 1.0 has no escape sequences, so values holding both quote
    characters are assembled with concat().

    Example:
        >>> xpath_literal("it's")
        '"it\\'s"'
    """
    value = str(value)
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def attribute_filter(attribute: str, values: Criteria, operator: str = 'or') -> str:
    """
    Build an equality predicate over an attribute.

    Args:
        attribute: Attribute step, e.g. '@id'
        values: One value or a list of values
        operator: 'or' (match any value) or 'and'

    Returns:
        Predicate like "[@id='a' or @id='b']", or '' when values is empty
    """
    values = to_list(values)
    if not values:
        return ''
    clauses = [f"{attribute}={xpath_literal(value)}" for value in values]
    return '[' + f' {operator} '.join(clauses) + ']'


def attribute_contains_word_filter(attribute: str, words: Criteria, operator: str) -> str:
    """
    Build a whole-token containment predicate over a space separated attribute.

    The attribute is normalized and padded with spaces so that a word only
    matches a complete token ('image' never matches 'cover-image').

    Args:
        attribute: Attribute step, e.g. '@properties'
        words: One word or a list of words
        operator: 'and' for "all", 'or' for "any"

    Returns:
        Predicate string, or '' when words is empty
    """
    words = to_list(words)
    if not words:
        return ''
    clauses = [
        f"contains(concat(' ', normalize-space({attribute}), ' '), {xpath_literal(f' {word} ')})"
        for word in words
    ]
    return '[' + f' {operator} '.join(clauses) + ']'


def id_filter(ids: Criteria) -> str:
    return attribute_filter('@id', ids)


def any_properties_filter(properties: Criteria) -> str:
    return attribute_contains_word_filter('@properties', properties, 'or')


def all_properties_filter(properties: Criteria) -> str:
    return attribute_contains_word_filter('@properties', properties, 'and')


def any_rel_filter(rel: Criteria) -> str:
    return attribute_contains_word_filter('@rel', rel, 'or')


def all_rel_filter(rel: Criteria) -> str:
    return attribute_contains_word_filter('@rel', rel, 'and')
