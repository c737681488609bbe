"""Customer rule set — the customer/address record checked by the service.

Record shape:
    name: string, email: string, birth_date: string, age: integer,
    addresses: sequence<{state: string, zip: string}>
"""

from typing import Optional

from recordguard.config import get_settings
from recordguard.validators import (
    RuleSet,
    RuleSetBuilder,
    datetime_format,
    each,
    email,
    fixed_length,
    length,
    numeric,
    required,
    value_range,
)


def build_address_rules() -> RuleSet:
    return (
        RuleSetBuilder("address")
        .string("state", required())
        .string("zip", required(), numeric(), fixed_length(5))
        .build()
    )


def build_customer_rules(datetime_fmt: Optional[str] = None) -> RuleSet:
    """Build the customer rule set.

    Args:
        datetime_fmt: strptime format for birth_date. Defaults to the
            DATETIME_FORMAT setting (RFC 3339).
    """
    fmt = datetime_fmt or get_settings().DATETIME_FORMAT
    return (
        RuleSetBuilder("customer")
        .string("name", required(), length(3, 50))
        .string("email", email())  # optional: checked only when provided
        .string("birth_date", required(), datetime_format(fmt))
        .integer("age", value_range(0, 100))
        .sequence("addresses", required(), each(required()), of=build_address_rules())
        .build()
    )


CUSTOMER_RULES = build_customer_rules()
