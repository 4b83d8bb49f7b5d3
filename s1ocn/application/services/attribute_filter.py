"""Attribute filter fragments for catalogue queries."""

from s1ocn.domain.entities import AttributeDescriptor
from s1ocn.domain.enums import ValueOperator
from s1ocn.domain.errors import InvalidAttributeNameError, InvalidOperatorError
from s1ocn.domain.ports import AttributeCatalogPort
from s1ocn.domain.types import AttributeValue

ODATA_NAMESPACE = "OData.CSC"

ATTRIBUTE_FILTER_TEMPLATE = (
    "Attributes/{ns}.{value_type}Attribute/any("
    "att:att/Name%20eq%20%27{name}%27"
    "%20and%20att/{ns}.{value_type}Attribute/Value%20{operator}%20{value})"
)


def encode_query_text(text: str) -> str:
    """Percent-encode the characters the catalogue query syntax cares about."""
    return text.replace(" ", "%20").replace("'", "%27")


def encode_attribute_value(value: AttributeValue) -> str:
    """Render a value as an OData literal."""
    if isinstance(value, str):
        # OData escapes a quote inside a string literal by doubling it
        escaped = value.replace("'", "''")
        return f"%27{encode_query_text(escaped)}%27"
    if isinstance(value, bool):
        return "true" if value else "false"
    return encode_query_text(str(value))


def parse_operator(operator: ValueOperator | str) -> ValueOperator:
    """Validate a comparison operator."""
    try:
        return ValueOperator(operator)
    except ValueError as e:
        allowed = ", ".join(op.value for op in ValueOperator)
        raise InvalidOperatorError(
            f"{operator} is not a valid operator, expected one of: {allowed}"
        ) from e


class AttributeFilterBuilder:
    """Builds type-aware attribute predicates checked against the catalogue."""

    def __init__(self, catalog: AttributeCatalogPort, namespace: str = ODATA_NAMESPACE) -> None:
        """Initialize attribute filter builder."""
        self.catalog = catalog
        self.namespace = namespace

    def descriptor(self, attribute_name: str) -> AttributeDescriptor:
        """Look up the catalogue descriptor of an attribute."""
        for descriptor in self.catalog.get_attributes():
            if descriptor.name == attribute_name:
                return descriptor
        raise InvalidAttributeNameError(attribute_name)

    def build(
        self,
        attribute_name: str,
        attribute_value: AttributeValue,
        value_operator: ValueOperator | str = ValueOperator.EQ,
    ) -> str:
        """Build the filter fragment for one attribute."""
        operator = parse_operator(value_operator)
        descriptor = self.descriptor(attribute_name)

        return ATTRIBUTE_FILTER_TEMPLATE.format(
            ns=self.namespace,
            value_type=descriptor.value_type,
            name=encode_query_text(attribute_name),
            operator=operator.value,
            value=encode_attribute_value(attribute_value),
        )
