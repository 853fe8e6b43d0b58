"""Sentinel filters for resource identifier lookups."""

from enum import StrEnum


class ResourceIdentifierFilter(StrEnum):
    """Resource identifier criteria that are not a concrete identifier.

    ANY does not filter, IS_NULL selects collection resources and
    IS_NOT_NULL selects item resources.
    """

    ANY = "@@@ __any__ @@@"
    IS_NULL = "@@@ __is_null__ @@@"
    IS_NOT_NULL = "@@@ __is_not_null__ @@@"
