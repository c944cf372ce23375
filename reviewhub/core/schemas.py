from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body base: accepts camelCase (the UI's casing) or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelResponse(BaseModel):
    """
    Response base: read from ORM attributes by field name, serialized in camelCase.
    FastAPI serializes response models by alias, so field ``employee_id`` goes out
    as ``employeeId``.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )
