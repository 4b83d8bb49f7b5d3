"""Catalogue DTOs."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from s1ocn.domain.entities import AttributeDescriptor, Page
from s1ocn.domain.types import ProductRecord


class AttributeEntry(BaseModel):
    """Attribute entry from the Attributes endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(alias="Name")
    value_type: str = Field(alias="ValueType")

    def to_descriptor(self) -> AttributeDescriptor:
        """Convert to domain descriptor."""
        return AttributeDescriptor(name=self.name, value_type=self.value_type)


AttributeList = TypeAdapter(list[AttributeEntry])


class ProductPage(BaseModel):
    """One page of the Products endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: list[ProductRecord] = Field(default_factory=list)
    next_link: str | None = Field(None, alias="@odata.nextLink")

    def to_page(self) -> Page:
        """Convert to domain page."""
        return Page(items=list(self.value), next_link=self.next_link)
