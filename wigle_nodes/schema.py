from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional, Any, Union


class IOField(BaseModel):
    type: Literal["string", "number", "boolean", "options", "collection", "object", "array", "any"] = "string"
    display_name: Optional[str] = None
    required: bool = False
    default: Optional[Any] = None
    description: Optional[str] = None
    secret: bool = False
    # allowed values for "options" fields
    options: List[Any] = []
    # sub-fields of a "collection"
    properties: Dict[str, "IOField"] = Field(default_factory=dict)
    # field is only read when every named parameter holds one of the listed values
    show_when: Dict[str, List[Any]] = Field(default_factory=dict)


IOField.model_rebuild()


class CredentialSpec(BaseModel):
    name: str
    display_name: str
    properties: Dict[str, IOField] = Field(default_factory=dict)


class AuthSpec(BaseModel):
    type: Literal["none", "basic"] = "none"
    provider: Optional[str] = None
    credential: Optional[str] = None
    required: bool = False
    # dotted path "module:function" of the credential test
    tested_by: Optional[str] = None


class ImplOpenAPI(BaseModel):
    type: Literal["http"] = "http"
    openapi_provider: str
    operation_id: str
    base_url: Optional[str] = None


class ImplPython(BaseModel):
    type: Literal["python"] = "python"
    module: str
    function: str = "run"


Impl = Union[ImplOpenAPI, ImplPython]


class NodeSpec(BaseModel):
    name: str
    version: str = "1.0.0"
    title: str
    category: str
    doc: Optional[str] = None
    auth: AuthSpec = AuthSpec()
    inputs: Dict[str, IOField] = Field(default_factory=dict)
    outputs: Dict[str, IOField] = Field(default_factory=dict)
    impl: Impl = Field(discriminator="type")

    @field_validator("name")
    @classmethod
    def name_must_have_dot(cls, v):
        if "." not in v:
            raise ValueError("name should be namespaced like provider.action")
        return v


class CredentialTestResult(BaseModel):
    status: Literal["OK", "Error"]
    message: str
