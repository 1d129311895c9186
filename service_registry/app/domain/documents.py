"""
Create-document body accepted by the remote registry.

Field aliases carry the registry's JSON names; models accept either the
alias or the Python attribute name on input.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RegistryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Description(RegistryModel):
    participant_inn: str = Field(default="", alias="participantInn")


class Product(RegistryModel):
    certificate_document: str = ""
    certificate_document_date: str = Field(default="", alias="certificate_documentDate")
    certificate_document_number: str = Field(default="", alias="certificate_documentNumber")
    owner_inn: str = ""
    producer_inn: str = ""
    production_date: str = ""
    tnved_code: str = ""
    uit_code: str = ""
    uitu_code: str = ""


class Document(RegistryModel):
    """A goods-introduction document with its product lines."""

    description: Description = Field(default_factory=Description)
    doc_id: str = ""
    doc_status: str = ""
    doc_type: str = ""
    import_request: bool = Field(default=False, alias="importRequest")
    owner_inn: str = ""
    production_date: str = ""
    production_type: str = ""
    products: List[Product] = Field(default_factory=list)
    reg_date: str = ""
    reg_number: str = ""
