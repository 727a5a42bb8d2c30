from collections.abc import Mapping
from http import HTTPMethod
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    JsonValue,
    PlainSerializer,
    PlainValidator,
    RootModel,
    Tag,
    ValidationError,
    model_validator,
)

from httpchain_pool.exceptions import DefinitionError
from httpchain_pool.extractor import ValuePath

METHOD_TAGS = {
    "Get": HTTPMethod.GET,
    "Post": HTTPMethod.POST,
}


def validate_supported_method(v: HTTPMethod) -> HTTPMethod:
    if v not in METHOD_TAGS.values():
        raise ValueError(f"Unsupported HTTP method: {v}")
    return v


def validate_value_path(v: Any) -> ValuePath:
    match v:
        case ValuePath():
            return v
        case str():
            return ValuePath.parse(v)
    raise ValueError(f"Value path must be a dotted string, got {type(v).__name__}")


SupportedMethod = Annotated[HTTPMethod, AfterValidator(validate_supported_method)]
ValuePathField = Annotated[
    ValuePath,
    PlainValidator(validate_value_path, json_schema_input_type=str),
    PlainSerializer(lambda x: str(x), return_type=str),
]


class Const(BaseModel):
    value: JsonValue = Field(alias="Const", description="Literal JSON value.")
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class Ref(BaseModel):
    name: str = Field(alias="Ref", min_length=1, description="Name of the request whose resolved value is used.")
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def get_argument_discriminator(v: Any) -> str | None:
    match v:
        case Const():
            return "Const"
        case Ref():
            return "Ref"
        case dict() if "Const" in v or "value" in v:
            return "Const"
        case dict() if "Ref" in v or "name" in v:
            return "Ref"
    return None


Argument = Annotated[
    Annotated[Const, Tag("Const")] | Annotated[Ref, Tag("Ref")],
    Discriminator(get_argument_discriminator),
]


class RequestDefinition(BaseModel):
    """Declarative description of one named HTTP call.

    Configuration wraps the body in a method tag, e.g.
    ``{"Get": {"url": "...", "path": [...], "params": {...}, "value": "a.b"}}``.
    """

    method: SupportedMethod = Field(default=HTTPMethod.GET)
    url: str = Field(min_length=1, description="URL template that path segments are appended to.")
    path: tuple[Argument, ...] = Field(default=(), description="Path segments, in order.")
    params: dict[str, Argument] = Field(default_factory=dict, description="Query parameters.")
    extractor: ValuePathField = Field(
        default=ValuePath(),
        alias="value",
        description="Dotted path selecting the result from the JSON response, empty for the whole body.",
        examples=["", "data.id", "items.0.name"],
    )
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def unwrap_method_tag(cls, data: Any) -> Any:
        if isinstance(data, dict) and len(data) == 1:
            ((tag, body),) = data.items()
            if tag in METHOD_TAGS and isinstance(body, dict):
                return {**body, "method": METHOD_TAGS[tag]}
        return data


class RequestDefinitions(RootModel):
    root: dict[str, RequestDefinition]


def validate_definitions(data: Mapping[str, Any]) -> dict[str, RequestDefinition]:
    """Validate a configuration mapping into request definitions.

    Raises:
        DefinitionError: If any definition has an invalid shape
    """
    try:
        return RequestDefinitions.model_validate(dict(data)).root
    except ValidationError as e:
        error_details = []
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            error_details.append(f"  - {loc}: {error['msg']}")
        raise DefinitionError("Cannot parse request definitions:\n" + "\n".join(error_details)) from None
